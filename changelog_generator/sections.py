"""
Changelog document parsing.

Splits an existing changelog into per-release sections and inserts freshly
rendered releases into it.
"""

import re
from typing import List

from .models import ReleaseSection

RELEASE_HEAD_RE = re.compile(r"^#{2,}[ \t]+([^\r\n]*\d+\.\d+\.\d+[^\r\n]*?)[ \t\r]*$", re.M)
VERSION_RE = re.compile(r"^v?(\d+\.\d+\.\d+)$")
TITLE_RE = re.compile(r"^#[ \t]+[^\r\n]*", re.M)


def parse_changelog_markdown(contents: str) -> List[ReleaseSection]:
    """
    Split a changelog into release sections, in document order.

    Every heading of level two or deeper that mentions a ``x.y.z`` version
    starts a section; its body runs until the next such heading. The version
    is only filled in when the heading text is a bare, optionally
    ``v``-prefixed, version. A document without release headings yields an
    empty list.
    """
    headings = list(RELEASE_HEAD_RE.finditer(contents))
    releases: List[ReleaseSection] = []

    for i, heading in enumerate(headings):
        end = headings[i + 1].start() if i + 1 < len(headings) else len(contents)
        version = VERSION_RE.match(heading.group(1))
        releases.append(ReleaseSection(
            version=version.group(1) if version else None,
            body=contents[heading.end():end].strip(),
        ))

    return releases


def insert_release(contents: str, version: str, body: str) -> str:
    """
    Add a ``## v{version}`` section on top of the existing releases.

    The section goes right before the first release heading, or after the
    ``# Changelog`` title when there are no releases yet.

    Raises:
        ValueError: If the document already has a section for ``version``.
    """
    version = version.lstrip("v")
    if any(release.version == version for release in parse_changelog_markdown(contents)):
        raise ValueError(f"Changelog already contains a section for v{version}")

    # Keep the document's line endings.
    nl = "\r\n" if "\r\n" in contents else "\n"
    text = body.strip().replace("\r\n", "\n").replace("\n", nl)
    block = f"## v{version}{nl}{nl}{text}{nl}{nl}"

    first = RELEASE_HEAD_RE.search(contents)
    if first:
        return contents[:first.start()] + block + contents[first.start():]

    title = TITLE_RE.search(contents)
    if title:
        head = contents[:title.end()].rstrip()
        rest = contents[title.end():].strip()
        return head + nl + nl + block + (rest + nl if rest else "")

    rest = contents.strip()
    return "# Changelog" + nl + nl + block + (rest + nl if rest else "")
