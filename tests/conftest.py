from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


import pytest

from changelog_generator.config import ChangelogConfig, TypeConfig
from changelog_generator.models import CommitAuthor, CommitRecord


@pytest.fixture
def make_commit():
    def _make(
        type: str = "feat",
        description: str = "add x",
        *,
        scope: str | None = None,
        is_breaking: bool = False,
        name: str | None = "Jane Doe",
        email: str | None = "j@x.com",
        references=None,
    ) -> CommitRecord:
        author = CommitAuthor(name=name, email=email) if name is not None else None
        return CommitRecord(
            type=type,
            description=description,
            scope=scope,
            is_breaking=is_breaking,
            author=author,
            references=list(references or []),
        )

    return _make


@pytest.fixture
def config() -> ChangelogConfig:
    return ChangelogConfig(
        types={
            "feat": TypeConfig("Features"),
            "fix": TypeConfig("Fixes"),
        }
    )
