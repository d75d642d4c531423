"""
Changelog Generator - A modular tool for generating release changelogs from commit history.
"""

from .models import AuthorAggregate, CommitAuthor, CommitRecord, Reference, ReleaseSection
from .config import ChangelogConfig, TypeConfig, load_config
from .repo import RepoConfig, resolve_repo_config
from .parser import CommitParser, group_by_scope, group_by_type
from .generator import ChangelogGenerator
from .sections import insert_release, parse_changelog_markdown

__all__ = [
    'AuthorAggregate',
    'CommitAuthor',
    'CommitRecord',
    'Reference',
    'ReleaseSection',
    'ChangelogConfig',
    'TypeConfig',
    'load_config',
    'RepoConfig',
    'resolve_repo_config',
    'CommitParser',
    'group_by_scope',
    'group_by_type',
    'ChangelogGenerator',
    'insert_release',
    'parse_changelog_markdown',
]
