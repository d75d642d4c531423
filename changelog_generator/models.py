"""
Data models for the changelog generator.

This module contains the shared data structures used across all modules.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CommitAuthor:
    """Name and email of a commit author."""
    name: str
    email: Optional[str] = None


@dataclass
class Reference:
    """A link target mentioned by a commit (pull request, issue or hash)."""
    type: str
    value: str


@dataclass
class CommitRecord:
    """Represents a single parsed commit."""
    type: str
    description: str
    scope: Optional[str] = None
    is_breaking: bool = False
    author: Optional[CommitAuthor] = None
    references: List[Reference] = field(default_factory=list)
    sha: str = ""
    shortcut: str = ""
    body: str = ""


@dataclass
class AuthorAggregate:
    """All emails seen for one normalized author name, plus its resolved handle."""
    name: str
    emails: List[str] = field(default_factory=list)
    handle: Optional[str] = None

    def add_email(self, email: Optional[str]) -> None:
        if email and email not in self.emails:
            self.emails.append(email)


@dataclass
class ReleaseSection:
    """One version block of a changelog document."""
    version: Optional[str]
    body: str
