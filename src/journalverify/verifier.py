# verifier.py
from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from .errors import (
    CheckoutFailed,
    LocalFileNotPresent,
    LocalTagNotPresent,
    RemoteFileNotPresent,
)
from .git_facts import git
from .model import FileRequirement, JournalRequirement, TagRequirement
from .ui.console import get_console

# Local:  files -> regexes -> tag exists?
# Remote: checkout tag -> files -> regexes


class Mode(enum.Enum):
    LOCAL = "LOCAL"
    REMOTE = "REMOTE"


@dataclass(frozen=True)
class Violation:
    """A regex that did not match. Reported, never raised."""
    mode: Mode
    tag_name: str
    file_pathname: str
    regex: str
    message: str

    def __str__(self) -> str:
        return f"Required text is not present: {self.message} in {self.mode.value} file {self.file_pathname}"


@dataclass
class VerificationReport:
    mode: Mode
    tags_checked: List[str] = field(default_factory=list)
    violations: List[Violation] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.violations


@lru_cache(maxsize=None)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def matches(content: str, pattern: str) -> bool:
    """True if `pattern` matches anywhere in `content`."""
    return _compile(pattern).search(content) is not None


# ----------------------------------------------------------------------
# Per-file check
# ----------------------------------------------------------------------

def _check_file(
    repo_root: Path,
    tag: TagRequirement,
    file_req: FileRequirement,
    mode: Mode,
    report: VerificationReport,
) -> None:
    path = repo_root / file_req.file_pathname
    if not path.is_file():
        # relative path on purpose; the caller knows which root
        if mode is Mode.LOCAL:
            raise LocalFileNotPresent(file_pathname=file_req.file_pathname)
        raise RemoteFileNotPresent(file_pathname=file_req.file_pathname)

    content = path.read_text(encoding="utf-8")

    console = get_console()
    for rm in file_req.regex_messages:
        if matches(content, rm.regex):
            continue
        violation = Violation(
            mode=mode,
            tag_name=tag.tag_name,
            file_pathname=file_req.file_pathname,
            regex=rm.regex,
            message=rm.message,
        )
        report.violations.append(violation)
        console.print_violation(violation)


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def verify_local(
    requirement: JournalRequirement,
    repo_root: str | Path,
    *,
    timeout: Optional[float] = None,
) -> VerificationReport:
    """
    Verify a pre-existing working copy without touching its checkout.

    For each tag: check every file's content, THEN confirm the tag exists.
    Regex mismatches accumulate in the report; a missing file or missing tag
    raises and ends the run.

    Raises:
        LocalFileNotPresent, LocalTagNotPresent
    """
    root = Path(repo_root).expanduser()
    report = VerificationReport(mode=Mode.LOCAL)
    console = get_console()

    for tag in requirement:
        console.print_tag_started(tag.tag_name, Mode.LOCAL.value)
        for file_req in tag.file_requirements:
            _check_file(root, tag, file_req, Mode.LOCAL, report)

        result = git.rev_exists(tag.tag_name, root, timeout=timeout)
        if not result.ok:
            raise LocalTagNotPresent(tag_name=tag.tag_name, error_message=result.stderr)
        report.tags_checked.append(tag.tag_name)

    return report


def verify_remote(
    requirement: JournalRequirement,
    repo_root: str | Path,
    *,
    timeout: Optional[float] = None,
) -> VerificationReport:
    """
    Verify a fresh clone by checking out each tag in turn.

    The working tree at `repo_root` is mutated by every checkout, so tags are
    processed strictly in document order.

    Raises:
        CheckoutFailed, RemoteFileNotPresent
    """
    root = Path(repo_root).expanduser()
    report = VerificationReport(mode=Mode.REMOTE)
    console = get_console()

    for tag in requirement:
        console.print_tag_started(tag.tag_name, Mode.REMOTE.value)
        result = git.checkout(tag.tag_name, root, timeout=timeout)
        if not result.ok:
            # later file checks would run against the wrong revision
            raise CheckoutFailed(tag_name=tag.tag_name, error_message=result.stderr)

        for file_req in tag.file_requirements:
            _check_file(root, tag, file_req, Mode.REMOTE, report)
        report.tags_checked.append(tag.tag_name)

    return report


def verify(
    requirement: JournalRequirement,
    repo_root: str | Path,
    mode: Mode,
    *,
    timeout: Optional[float] = None,
) -> VerificationReport:
    if mode is Mode.LOCAL:
        return verify_local(requirement, repo_root, timeout=timeout)
    return verify_remote(requirement, repo_root, timeout=timeout)
