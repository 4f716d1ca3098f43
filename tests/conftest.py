from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from journalverify.ui.console import Console, set_console

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")

GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test",
    "GIT_AUTHOR_EMAIL": "test@test.com",
    "GIT_COMMITTER_NAME": "Test",
    "GIT_COMMITTER_EMAIL": "test@test.com",
    "GIT_CONFIG_NOSYSTEM": "1",
}


def git(*args: str, cwd: Path) -> str:
    env = {**os.environ, **GIT_ENV}
    out = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],
        cwd=cwd,
        env=env,
        check=True,
        capture_output=True,
        text=True,
    )
    return out.stdout.strip()


def commit_files(repo: Path, files: dict[str, str], message: str = "update") -> None:
    for rel, content in files.items():
        path = repo / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    git("add", "-A", cwd=repo)
    git("commit", "-q", "-m", message, cwd=repo)


@pytest.fixture(autouse=True)
def fresh_console():
    set_console(Console())
    yield


@pytest.fixture
def make_repo(tmp_path):
    """
    Create a git repository in tmp_path/<name>.

    make_repo("journal", [("v1", {"a.md": "..."}), ("v2", {...})]) commits
    each file set in order and tags it. A tag of None commits without tagging.
    """
    def _make(name: str, history: list[tuple[str | None, dict[str, str]]]) -> Path:
        repo = tmp_path / name
        repo.mkdir()
        git("init", "-q", cwd=repo)
        for tag, files in history:
            commit_files(repo, files, message=f"commit for {tag or 'untagged'}")
            if tag:
                git("tag", tag, cwd=repo)
        return repo

    return _make
