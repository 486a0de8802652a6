"""Shared fixtures: manifest files on disk and throwaway git repositories."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")

DEPLOYMENT = "apiVersion: apps/v1\nkind: Deployment\nmetadata:\n  name: web\n"
CONFIGMAP = "kind: ConfigMap\nmetadata:\n  name: settings\n"
CRONJOB = "apiVersion: batch/v1\nkind: CronJob\nmetadata:\n  name: nightly\n"


def run_git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        [
            "git",
            "-c",
            "user.name=findkind",
            "-c",
            "user.email=findkind@example.com",
            "-c",
            "commit.gpgsign=false",
            "-C",
            str(repo),
            *args,
        ],
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout


def write_files(base: Path, files: dict[str, str]) -> None:
    for rel, text in files.items():
        target = base / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")


def commit_all(repo: Path, message: str = "update") -> None:
    run_git(repo, "add", "-A")
    run_git(repo, "commit", "-q", "--allow-empty", "-m", message)


@pytest.fixture
def make_repo(tmp_path: Path):
    """Create a repository under tmp_path with ``files`` committed on ``main``."""

    def _make(name: str = "repo", files: dict[str, str] | None = None) -> Path:
        repo = tmp_path / name
        repo.mkdir(parents=True)
        run_git(repo, "init", "-q")
        run_git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
        write_files(repo, files or {})
        commit_all(repo, "initial")
        return repo

    return _make


@pytest.fixture
def add_branch():
    """Create ``branch`` from the current HEAD, commit ``files`` on it, return to main."""

    def _add(repo: Path, branch: str, files: dict[str, str] | None = None) -> None:
        run_git(repo, "checkout", "-q", "-b", branch)
        write_files(repo, files or {})
        commit_all(repo, f"work on {branch}")
        run_git(repo, "checkout", "-q", "main")

    return _add
