"""
Changelog Generation Module

This module contains the ChangelogGenerator class responsible for rendering
a release's Markdown changelog from parsed commits: typed sections, breaking
changes and the list of contributors.
"""

import logging
from typing import Dict, List, Optional

from .config import ChangelogConfig
from .gitmoji import convert_gitmoji
from .identity import (
    Resolver,
    aggregate_authors,
    find_author_by_email,
    format_name,
    resolve_handles,
    upper_first,
)
from .models import AuthorAggregate, CommitRecord, Reference
from .parser import group_by_scope, group_by_type
from .repo import format_compare_changes, format_reference

logger = logging.getLogger("changelog-generator.generator")

NOREPLY_DOMAIN = "noreply.github.com"
PROFILE_URL = "https://github.com/"


class ChangelogGenerator:
    """
    Compose a changelog Markdown string from parsed commits.

    Args:
        config: Section titles, repository and author exclusion settings.
        resolver: Optional email -> username lookup. Without it no contributor
                  handles are resolved and authors render as plain names.
    """

    def __init__(self, config: ChangelogConfig, resolver: Optional[Resolver] = None) -> None:
        self.config = config
        self.resolver = resolver

    def generate_markdown(self, commits: List[CommitRecord]) -> str:
        """
        Build the Markdown changelog for one release.

        Args:
            commits: Parsed commits of the release, in log order

        Returns:
            Markdown content as a string
        """
        config = self.config
        type_groups = group_by_type(commits)

        lines: List[str] = ["## What's Changed"]
        if config.repo and config.from_ref:
            version = f"v{config.new_version}" if config.new_version else None
            lines.extend(["", "**Full Changelog**: " + format_compare_changes(version, config)])

        authors = aggregate_authors(commits, config.exclude_authors)
        if self.resolver is not None:
            resolve_handles(authors, self.resolver, max_workers=config.max_workers)

        breaking_changes: List[str] = []
        for ctype, type_config in config.types.items():
            group = type_groups.get(ctype)
            if not group:
                continue
            lines.extend(["", "### " + type_config.title, ""])
            if config.group_by_scope:
                section = self._format_scoped_group(group, authors, breaking_changes)
            else:
                section = self._format_group(group, authors, breaking_changes, with_scope=True)
            lines.extend(section)

        skipped = sum(len(group) for ctype, group in type_groups.items() if ctype not in config.types)
        if skipped:
            logger.debug("Left out %d commits without a configured type", skipped)

        if breaking_changes:
            lines.extend(["", "#### ⚠️ Breaking Changes", ""])
            lines.extend(breaking_changes)

        if authors:
            lines.extend(["", "### ❤️ Contributors", ""])
            lines.extend(format_contributor(author) for author in authors.values())

        return convert_gitmoji("\n".join(lines).strip())

    def _format_group(
        self,
        group: List[CommitRecord],
        authors: Dict[str, AuthorAggregate],
        breaking_changes: List[str],
        with_scope: bool,
    ) -> List[str]:
        lines = []
        for commit in reversed(group):
            line = format_commit(commit, authors, self.config, with_scope=with_scope)
            lines.append(line)
            if commit.is_breaking:
                breaking_changes.append(line)
        return lines

    def _format_scoped_group(
        self,
        group: List[CommitRecord],
        authors: Dict[str, AuthorAggregate],
        breaking_changes: List[str],
    ) -> List[str]:
        scope_groups = group_by_scope(group)
        lines = self._format_group(scope_groups.pop(None, []), authors, breaking_changes, with_scope=False)
        for scope, scoped in scope_groups.items():
            if lines:
                lines.append("")
            lines.extend(["#### " + scope, ""])
            lines.extend(self._format_group(scoped, authors, breaking_changes, with_scope=False))
        return lines


def format_commit(
    commit: CommitRecord,
    authors: Dict[str, AuthorAggregate],
    config: ChangelogConfig,
    with_scope: bool = True,
) -> str:
    """Render one changelog bullet for a commit."""
    parts = ["- "]
    if with_scope and commit.scope:
        parts.append(f"**{commit.scope.strip()}:** ")
    if commit.is_breaking:
        parts.append("⚠️ ")
    parts.append(upper_first(commit.description or ""))
    if commit.author:
        parts.append(" by " + format_author(commit, authors))
    parts.append(format_references(commit.references, config))
    return "".join(parts)


def format_author(commit: CommitRecord, authors: Dict[str, AuthorAggregate]) -> str:
    """Profile link when the author's handle is known, plain display name otherwise."""
    author = find_author_by_email(authors, commit.author.email) or authors.get(format_name(commit.author.name))
    if author and author.handle:
        return format_profile_link(author.handle)
    if author:
        return author.name
    return format_name(commit.author.name)


def format_profile_link(handle: str) -> str:
    return f"[@{handle}]({PROFILE_URL}{handle})"


def format_references(references: List[Reference], config: ChangelogConfig) -> str:
    """Pull requests first, then issues; otherwise the first other reference."""
    pull_requests = [ref for ref in references if ref.type == "pull-request"]
    issues = [ref for ref in references if ref.type == "issue"]
    if pull_requests or issues:
        formatted = [format_reference(ref, config.repo) for ref in pull_requests + issues]
        return " (" + ", ".join(formatted) + ")"
    if references:
        return " (" + format_reference(references[0], config.repo) + ")"
    return ""


def format_contributor(author: AuthorAggregate) -> str:
    if author.handle:
        return f"- {author.name} ({format_profile_link(author.handle)})"
    email = next((e for e in author.emails if NOREPLY_DOMAIN not in e), None)
    if email:
        return f"- {author.name} <{email}>"
    return f"- {author.name}"
