"""
Commit parsing and grouping module.

This module handles parsing commit messages using Conventional Commits format
into CommitRecord objects, and grouping parsed commits by type or scope.
"""

import re
from typing import Dict, List, Optional

from .models import CommitAuthor, CommitRecord, Reference


class CommitParser:
    """
    Parse commit messages into CommitRecord objects using Conventional Commits style.

    Messages that do not follow the convention keep an empty type, so they never
    land in a typed changelog section.
    """

    CONVENTIONAL_RE = re.compile(
        r"(?P<type>[a-z]+)(\((?P<scope>.+)\))?(?P<breaking>!)?: (?P<desc>.+)", re.I
    )
    PULL_REQUEST_RE = re.compile(r"\([ a-z]*(#\d+)\s*\)", re.I)
    ISSUE_RE = re.compile(r"(#\d+)")
    BREAKING_RE = re.compile(r"^BREAKING[ -]CHANGE:", re.M)

    @staticmethod
    def parse(message: str, sha: str = "", author: Optional[CommitAuthor] = None) -> CommitRecord:
        """
        Parse a full commit message (subject plus optional body).

        Returns:
            CommitRecord with type, scope, description, breaking flag and references
        """
        lines = message.strip().splitlines()
        shortcut = lines[0].strip() if lines else ""
        body = "\n".join(lines[1:]).strip()

        references: List[Reference] = []
        for m in CommitParser.PULL_REQUEST_RE.finditer(shortcut):
            references.append(Reference("pull-request", m.group(1)))
        for m in CommitParser.ISSUE_RE.finditer(shortcut):
            if not any(ref.value == m.group(1) for ref in references):
                references.append(Reference("issue", m.group(1)))
        if sha:
            references.append(Reference("hash", sha[:7]))

        m = CommitParser.CONVENTIONAL_RE.match(shortcut)
        if m:
            ctype = m.group("type").lower()
            scope = m.group("scope")
            desc = CommitParser.PULL_REQUEST_RE.sub("", m.group("desc")).strip()
            is_breaking = bool(m.group("breaking"))
        else:
            ctype, scope, desc, is_breaking = "", None, shortcut, False

        if CommitParser.BREAKING_RE.search(body):
            is_breaking = True

        return CommitRecord(
            type=ctype,
            scope=scope.strip() if scope else None,
            description=desc,
            is_breaking=is_breaking,
            author=author,
            references=references,
            sha=sha,
            shortcut=shortcut,
            body=body,
        )


def group_by_type(commits: List[CommitRecord]) -> Dict[str, List[CommitRecord]]:
    """Group commits by type, keeping input order inside each group."""
    groups: Dict[str, List[CommitRecord]] = {}
    for commit in commits:
        groups.setdefault(commit.type, []).append(commit)
    return groups


def group_by_scope(commits: List[CommitRecord]) -> Dict[Optional[str], List[CommitRecord]]:
    """Group commits by scope (None for unscoped), keeping input order inside each group."""
    groups: Dict[Optional[str], List[CommitRecord]] = {}
    for commit in commits:
        groups.setdefault(commit.scope or None, []).append(commit)
    return groups
