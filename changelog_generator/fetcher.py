"""
GitHub data fetching module.

This module handles all GitHub API interactions: fetching the commits of a
release range, finding the latest tag, and looking up usernames by email,
using PyGithub.
"""

import logging
from typing import List, Optional

from .models import CommitAuthor, CommitRecord
from .parser import CommitParser

# External libs
try:
    from github import Github, Repository
except Exception as e:
    raise RuntimeError("PyGithub is required. Install with: pip install PyGithub") from e

# Set up logging
logger = logging.getLogger("changelog-generator.fetcher")


class GitHubFetcher:
    """
    Fetch commits, tags and user identities from GitHub using PyGithub.

    Args:
        token: Personal access token (or None for unauthenticated, but rate-limited).
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, token: Optional[str] = None, timeout: float = 15.0) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: GitHub personal access token for authentication.
                  If None, uses unauthenticated access (rate limited).
            timeout: Seconds to wait for each API request.
        """
        try:
            if token:
                self._g = Github(login_or_token=token, timeout=int(timeout))
            else:
                self._g = Github(timeout=int(timeout))
            logger.debug("GitHub client initialized (authenticated=%s)", bool(token))
        except Exception as e:
            logger.error("Failed to initialize GitHub client: %s", e)
            raise RuntimeError(f"GitHub client initialization failed: {e}") from e

    def _get_repo(self, owner: str, repo_name: str) -> Repository.Repository:
        try:
            return self._g.get_repo(f"{owner}/{repo_name}")
        except Exception as e:
            error_msg = f"Failed to access repository {owner}/{repo_name}: {e}"
            logger.error(error_msg)
            raise RuntimeError(error_msg) from e

    def fetch_default_branch(self, owner: str, repo_name: str) -> str:
        """Return the name of the repository's default branch."""
        return self._get_repo(owner, repo_name).default_branch

    def fetch_latest_tag(self, owner: str, repo_name: str) -> Optional[str]:
        """
        Return the most recent tag name, or None for untagged repositories.

        Raises:
            RuntimeError: If tags cannot be listed
        """
        repo = self._get_repo(owner, repo_name)
        try:
            for tag in repo.get_tags():
                logger.info("Latest tag of %s/%s is %s", owner, repo_name, tag.name)
                return tag.name
        except Exception as e:
            error_msg = f"Failed to list tags for {owner}/{repo_name}: {e}"
            logger.error(error_msg)
            raise RuntimeError(error_msg) from e
        return None

    def fetch_commits(
        self,
        owner: str,
        repo_name: str,
        base: Optional[str],
        head: str,
        max_commits: int = 500,
    ) -> List[CommitRecord]:
        """
        Fetch and parse the commits of a release range.

        Commits are returned newest first, like ``git log``. With a ``base``
        the range is ``base...head``; without one, the history of ``head``
        is read. At most ``max_commits`` of the newest commits are kept.

        Args:
            owner: Repository owner username
            repo_name: Repository name
            base: Previous release ref, or None
            head: Ref of the release being described
            max_commits: Maximum number of commits to fetch (default: 500)

        Returns:
            List of parsed CommitRecord objects

        Raises:
            RuntimeError: If commits cannot be fetched
        """
        repo = self._get_repo(owner, repo_name)
        try:
            if base:
                logger.info("Fetching commits %s...%s of %s/%s", base, head, owner, repo_name)
                # compare lists oldest first
                commits = list(repo.compare(base, head).commits)[::-1]
            else:
                logger.info("Fetching up to %d commits of %s from %s/%s", max_commits, head, owner, repo_name)
                commits = repo.get_commits(sha=head)

            result: List[CommitRecord] = []
            for c in commits:
                if len(result) >= max_commits:
                    break
                git_author = c.commit.author
                author = None
                if git_author and git_author.name:
                    author = CommitAuthor(name=git_author.name, email=git_author.email)
                result.append(CommitParser.parse(c.commit.message, sha=c.sha, author=author))

            logger.info("Successfully fetched %d commits from %s/%s", len(result), owner, repo_name)
            return result

        except Exception as e:
            error_msg = f"Failed to fetch commits for {owner}/{repo_name}: {e}"
            logger.error(error_msg)
            raise RuntimeError(error_msg) from e

    def find_username_by_email(self, email: str) -> Optional[str]:
        """
        Look up the GitHub username registered with ``email``.

        Returns:
            The login, or None when no public user has that email

        Raises:
            github.GithubException: If the search request fails
        """
        if email.endswith("@users.noreply.github.com"):
            # <id>+<login>@users.noreply.github.com
            local = email.split("@", 1)[0]
            return local.split("+", 1)[-1] or None
        users = self._g.search_users(f"{email} in:email")
        for user in users:
            logger.debug("Resolved %s to %s", email, user.login)
            return user.login
        return None

