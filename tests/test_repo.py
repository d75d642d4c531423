from __future__ import annotations

import pytest

from changelog_generator.config import ChangelogConfig
from changelog_generator.models import Reference
from changelog_generator.repo import (
    RepoConfig,
    format_compare_changes,
    format_reference,
    resolve_repo_config,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("octo/hello", RepoConfig("octo/hello", "github", "github.com")),
        ("gitlab:group/project", RepoConfig("group/project", "gitlab", "gitlab.com")),
        ("https://bitbucket.org/team/repo", RepoConfig("team/repo", "bitbucket", "bitbucket.org")),
        ("git@github.com:octo/hello.git", RepoConfig("octo/hello", "github", "github.com")),
        ("https://git.example.com/me/tool", RepoConfig("me/tool", None, "git.example.com")),
    ],
)
def test_resolve_repo_config(value, expected):
    assert resolve_repo_config(value) == expected


def test_resolve_repo_config_rejects_garbage():
    with pytest.raises(ValueError):
        resolve_repo_config("not a repo")


def test_repo_owner_and_name():
    repo = RepoConfig("octo/hello")

    assert repo.owner == "octo"
    assert repo.name == "hello"


def test_format_reference_per_provider():
    pr = Reference("pull-request", "#5")

    assert format_reference(pr, RepoConfig("o/r")) == "[#5](https://github.com/o/r/pull/5)"
    assert format_reference(pr, resolve_repo_config("gitlab:o/r")) == "[#5](https://gitlab.com/o/r/merge_requests/5)"
    assert format_reference(pr, resolve_repo_config("bitbucket:o/r")) == "[#5](https://bitbucket.org/o/r/pull-requests/5)"


def test_format_reference_falls_back_to_value():
    ref = Reference("issue", "#9")

    assert format_reference(ref, None) == "#9"
    assert format_reference(ref, RepoConfig("me/tool", None, "git.example.com")) == "#9"
    assert format_reference(Reference("ticket", "JIRA-1"), RepoConfig("o/r")) == "JIRA-1"


def test_format_compare_changes():
    config = ChangelogConfig(repo=RepoConfig("o/r"), from_ref="v1.0.0", to_ref="main")

    assert format_compare_changes("v1.1.0", config) == "[compare changes](https://github.com/o/r/compare/v1.0.0...v1.1.0)"
    assert format_compare_changes(None, config) == "[compare changes](https://github.com/o/r/compare/v1.0.0...main)"

    config.repo = resolve_repo_config("bitbucket:o/r")
    assert format_compare_changes(None, config) == (
        "[compare changes](https://bitbucket.org/o/r/branches/compare/v1.0.0...main)"
    )


def test_format_compare_changes_without_target_uses_head():
    config = ChangelogConfig(repo=RepoConfig("o/r"), from_ref="v1.0.0")

    assert format_compare_changes(None, config) == "[compare changes](https://github.com/o/r/compare/v1.0.0...HEAD)"
