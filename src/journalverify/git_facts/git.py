# git.py
# Small, focused wrapper around the Git CLI.
# This module centralizes all Git interactions so the rest of the codebase
# never needs to build a git command line directly.

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .. import settings
from ..errors import ProcessTimedOut
from ..process import CompletionStatus, run_process


def _git(
    args: list[str],
    cwd: str | Path | None = None,
    timeout: Optional[float] = None,
) -> CompletionStatus:
    """
    Execute a git command and return its completion status.

    This is the single low-level entry point for all Git operations in this file.
    Unlike a plain check_output wrapper, a non-zero exit is NOT raised here:
    every caller maps failure onto its own error kind and wants the
    captured stderr for the message.

    Args:
        args: List of git arguments (e.g. ["checkout", "v1.0"])
        cwd: Optional working directory in which to run the git command.
        timeout: Seconds to wait before the process is killed.
                 Defaults to settings.process_timeout().

    Returns:
        CompletionStatus of the finished process.

    Raises:
        ProcessLaunchFailed: git could not be started.
        ProcessTimedOut: git did not finish within the timeout.
    """
    if timeout is None:
        timeout = settings.process_timeout()

    status = run_process(settings.GIT_EXECUTABLE, args, cwd=cwd, timeout=timeout)
    if status.timed_out:
        raise ProcessTimedOut(command=" ".join(["git", *args]), timeout=timeout)
    return status


def clone(url: str, target: str, cwd: str | Path | None = None, timeout: Optional[float] = None) -> CompletionStatus:
    """
    Clone `url` into the directory `target` (relative to `cwd`).

    Returns:
        CompletionStatus; check `.ok` and report `.stderr` on failure.
    """
    # `git clone <url> <dir>` creates <dir> and checks out the default branch
    return _git(["clone", url, target], cwd=cwd, timeout=timeout)


def checkout(ref: str, repo_root: str | Path, timeout: Optional[float] = None) -> CompletionStatus:
    """
    Make the working tree at `repo_root` reflect `ref`.

    Checking out a tag leaves the repository in detached HEAD state, which is
    all a read-only verification needs.
    """
    return _git(["checkout", ref], cwd=repo_root, timeout=timeout)


def rev_exists(ref: str, repo_root: str | Path, timeout: Optional[float] = None) -> CompletionStatus:
    """
    Ask git whether `ref` resolves to a commit, without touching the working tree.

    Returns:
        CompletionStatus; `.ok` is True when the ref exists. The commit SHA in
        `.stdout` is not needed by callers.
    """
    # `git rev-list -n 1 <ref>` prints one commit and exits 0, or fails
    # with "unknown revision" on stderr.
    return _git(["rev-list", "-n", "1", ref], cwd=repo_root, timeout=timeout)
