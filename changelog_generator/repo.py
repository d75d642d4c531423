"""
Repository link formatting.

This module knows how to turn a repository identifier into base URLs and how
to render commit references and compare ranges as Markdown links for the
supported hosting providers.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional

from .models import Reference

PROVIDER_DOMAINS: Dict[str, str] = {
    "github": "github.com",
    "gitlab": "gitlab.com",
    "bitbucket": "bitbucket.org",
}

REF_PATHS: Dict[str, Dict[str, str]] = {
    "github": {"pull-request": "pull", "hash": "commit", "issue": "issues"},
    "gitlab": {"pull-request": "merge_requests", "hash": "commit", "issue": "issues"},
    "bitbucket": {"pull-request": "pull-requests", "hash": "commit", "issue": "issues"},
}

SHORT_REPO_RE = re.compile(r"^(?:(?P<provider>github|gitlab|bitbucket):)?(?P<repo>[\w.-]+/[\w.-]+)$")
URL_REPO_RE = re.compile(
    r"^(?:https?://|git@)(?P<domain>[^/:]+)[/:](?P<repo>[\w.-]+/[\w.-]+?)(?:\.git)?/?$"
)


@dataclass
class RepoConfig:
    """Where a repository is hosted."""
    repo: str
    provider: Optional[str] = "github"
    domain: Optional[str] = "github.com"

    @property
    def owner(self) -> str:
        return self.repo.split("/", 1)[0]

    @property
    def name(self) -> str:
        return self.repo.split("/", 1)[1]


def resolve_repo_config(value: str) -> RepoConfig:
    """
    Parse a repository identifier.

    Accepts ``owner/name``, ``provider:owner/name`` and clone or web URLs
    (``https://gitlab.com/owner/name``, ``git@github.com:owner/name.git``).

    Raises:
        ValueError: If the value cannot be recognised.
    """
    value = value.strip()
    m = SHORT_REPO_RE.match(value)
    if m:
        provider = m.group("provider") or "github"
        return RepoConfig(repo=m.group("repo"), provider=provider, domain=PROVIDER_DOMAINS[provider])

    m = URL_REPO_RE.match(value)
    if m:
        domain = m.group("domain")
        provider = None
        for name, known_domain in PROVIDER_DOMAINS.items():
            if domain == known_domain:
                provider = name
                break
        return RepoConfig(repo=m.group("repo"), provider=provider, domain=domain)

    raise ValueError(f"Unrecognised repository identifier: {value!r}")


def base_url(repo: RepoConfig) -> str:
    return f"https://{repo.domain}/{repo.repo}"


def format_reference(ref: Reference, repo: Optional[RepoConfig]) -> str:
    """
    Render a reference as a Markdown link.

    Falls back to the raw reference value when the provider is unknown or
    the reference type has no URL path for it.
    """
    if not repo or repo.provider not in REF_PATHS:
        return ref.value
    path = REF_PATHS[repo.provider].get(ref.type)
    if not path:
        return ref.value
    return f"[{ref.value}]({base_url(repo)}/{path}/{ref.value.lstrip('#')})"


def format_compare_changes(version: Optional[str], config) -> str:
    """
    Render the compare link between ``config.from_ref`` and the new version.

    ``config`` is a ChangelogConfig; ``version`` wins over ``config.to_ref``,
    and ``HEAD`` is used when neither is set.
    """
    part = "branches/compare" if config.repo.provider == "bitbucket" else "compare"
    target = version or config.to_ref or "HEAD"
    return f"[compare changes]({base_url(config.repo)}/{part}/{config.from_ref}...{target})"
