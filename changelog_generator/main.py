#!/usr/bin/env python3
"""
Main driver script for the changelog generator.

This script provides the command-line interface and coordinates all modules
to render a release changelog from GitHub commit history.

Usage (example):
    python -m changelog_generator.main --user octocat --repo Hello-World --new-version 1.2.0 --output CHANGELOG.md
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import load_config
from .fetcher import GitHubFetcher
from .generator import ChangelogGenerator
from .repo import RepoConfig
from .sections import insert_release

logger = logging.getLogger("changelog-generator")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a release changelog from GitHub commit history.")
    parser.add_argument("--user", "-u", required=True, help="GitHub owner/username")
    parser.add_argument("--repo", "-r", required=True, help="Repository name")
    parser.add_argument("--from", dest="from_ref", help="Previous release ref (default: latest tag)")
    parser.add_argument("--to", dest="to_ref", help="Release ref (default: default branch)")
    parser.add_argument("--new-version", help="Version being released, e.g. 1.2.0")
    parser.add_argument("--token", "-t", required=False, help="GitHub token (default: $GITHUB_TOKEN)")
    parser.add_argument("--config", "-c", help="JSON config file")
    parser.add_argument("--output", "-o", help="Changelog file to update (default: print to stdout)")
    parser.add_argument("--exclude-author", action="append", dest="exclude_authors",
                        help="Hide contributors whose name or email contains this text (repeatable)")
    parser.add_argument("--group-by-scope", action="store_true", default=None,
                        help="Subdivide each type section by commit scope")
    parser.add_argument("--no-lookup", action="store_true", help="Do not resolve contributor GitHub handles")
    parser.add_argument("--max-commits", type=int, default=500, help="Maximum number of commits to fetch")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def write_changelog(path: str, version: str, markdown: str) -> bool:
    """
    Insert the rendered release into the changelog at ``path``.

    Returns:
        False when the file already holds a section for ``version``
    """
    existing = ""
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            existing = f.read()

    try:
        updated = insert_release(existing, version, markdown)
    except ValueError as e:
        logger.warning("%s, leaving %s unchanged", e, path)
        return False

    with open(path, "w", encoding="utf-8") as f:
        f.write(updated)
    return True


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the changelog generator.

    Parses command line arguments, fetches the release's commits, renders
    the changelog and prints it or writes it into the changelog file.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = load_config(
            args.config,
            repo=RepoConfig(repo=f"{args.user}/{args.repo}"),
            from_ref=args.from_ref,
            to_ref=args.to_ref,
            new_version=args.new_version,
            exclude_authors=args.exclude_authors,
            group_by_scope=args.group_by_scope,
            token=args.token,
        )
        if args.output and not config.new_version:
            parser.error("--new-version is required together with --output")

        logger.info("Initializing GitHub fetcher...")
        fetcher = GitHubFetcher(token=config.token, timeout=config.lookup_timeout)

        if not config.from_ref:
            config.from_ref = fetcher.fetch_latest_tag(args.user, args.repo)
        if not config.to_ref:
            config.to_ref = fetcher.fetch_default_branch(args.user, args.repo)

        commits = fetcher.fetch_commits(
            args.user, args.repo, config.from_ref, config.to_ref, max_commits=args.max_commits
        )
        if not commits:
            logger.warning("No commits found between %s and %s", config.from_ref, config.to_ref)

        resolver = None if args.no_lookup else fetcher.find_username_by_email
        generator = ChangelogGenerator(config, resolver=resolver)
        md = generator.generate_markdown(commits)

        if not args.output:
            print(md)
            return

        logger.info("Writing changelog to %s", args.output)
        if write_changelog(args.output, config.new_version, md):
            logger.info("Changelog generation completed successfully")

    except KeyboardInterrupt:
        logger.info("Changelog generation interrupted by user")
        print("\nOperation cancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error("Changelog generation failed: %s", e)
        print(f"Error: changelog generation failed - {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
