"""
Author aggregation and identity resolution.

Authors are collected per normalized display name, then each author's emails
are looked up (one worker per author) to find their platform username. The
resulting map is handed to the formatter as a plain value.
"""

import concurrent.futures
import logging
from typing import Callable, Dict, List, Optional

from .models import AuthorAggregate, CommitRecord

logger = logging.getLogger("changelog-generator.identity")

BOT_MARKER = "[bot]"

# email -> username, or None when unknown. May raise.
Resolver = Callable[[str], Optional[str]]


def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def format_name(name: Optional[str]) -> str:
    """Normalize a display name: upper-case the first letter of each word."""
    return " ".join(upper_first(part.strip()) for part in (name or "").split(" "))


def aggregate_authors(commits: List[CommitRecord], exclude_authors: List[str]) -> Dict[str, AuthorAggregate]:
    """
    Collect contributing authors keyed by normalized name.

    Bots and authors whose name or email contains any of ``exclude_authors``
    are left out. Emails are deduplicated and kept in first-seen order.
    """
    authors: Dict[str, AuthorAggregate] = {}
    for commit in commits:
        if not commit.author:
            continue
        name = format_name(commit.author.name)
        if not name.strip() or BOT_MARKER in name:
            continue
        email = commit.author.email or ""
        if any(pattern in name or pattern in email for pattern in exclude_authors):
            continue
        authors.setdefault(name, AuthorAggregate(name=name)).add_email(commit.author.email)
    return authors


def _lookup_author(author: AuthorAggregate, resolver: Resolver) -> Optional[str]:
    for email in author.emails:
        try:
            handle = resolver(email)
        except Exception as e:
            logger.debug("Lookup failed for %s <%s>: %s", author.name, email, e)
            continue
        if handle:
            return handle
    return None


def resolve_handles(authors: Dict[str, AuthorAggregate], resolver: Resolver, max_workers: int = 8) -> None:
    """
    Fill in ``handle`` for every author the resolver knows.

    Blocks until every lookup has settled. Failed lookups leave the handle unset.
    """
    if not authors:
        return
    workers = max(1, min(max_workers, len(authors)))
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(_lookup_author, author, resolver): author
            for author in authors.values()
        }
        for future in concurrent.futures.as_completed(futures):
            author = futures[future]
            author.handle = future.result()
    resolved = sum(1 for author in authors.values() if author.handle)
    logger.info("Resolved %d of %d contributor handles", resolved, len(authors))


def find_author_by_email(authors: Dict[str, AuthorAggregate], email: Optional[str]) -> Optional[AuthorAggregate]:
    if not email:
        return None
    for author in authors.values():
        if email in author.emails:
            return author
    return None
