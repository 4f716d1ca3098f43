# runner.py
from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .model import JournalRequirement
from .source import CloneURL, cloned_repository
from .ui.console import get_console
from .verifier import VerificationReport, verify_local, verify_remote

# clone ---> verify LOCAL (content, then tag) ---> verify REMOTE (checkout, then content) ---> combine


class ResultPolicy(enum.Enum):
    """How the LOCAL and REMOTE phase results become one answer."""

    BOTH = "both"                 # both phases must pass
    REMOTE_ONLY = "remote-only"   # the remote result overwrites the local one

    @classmethod
    def choices(cls) -> list[str]:
        return [p.value for p in cls]


@dataclass(frozen=True)
class RunResult:
    local: VerificationReport
    remote: VerificationReport
    policy: ResultPolicy

    @property
    def success(self) -> bool:
        return combine_results(self.local, self.remote, self.policy)

    @property
    def violation_count(self) -> int:
        if self.policy is ResultPolicy.REMOTE_ONLY:
            return len(self.remote.violations)
        return len(self.local.violations) + len(self.remote.violations)


def combine_results(
    local: VerificationReport,
    remote: VerificationReport,
    policy: ResultPolicy = ResultPolicy.BOTH,
) -> bool:
    if policy is ResultPolicy.REMOTE_ONLY:
        return remote.success
    return local.success and remote.success


def run_verification(
    requirement: JournalRequirement,
    *,
    local_root: str | Path,
    clone_url: CloneURL,
    work_dir: str | Path = ".",
    timeout: Optional[float] = None,
    policy: ResultPolicy = ResultPolicy.BOTH,
) -> RunResult:
    """
    Run both verification phases.

    The fresh clone is made first, so a bad URL or unreachable remote fails
    before any local output. It is removed when this returns or raises.

    Raises:
        VerificationError: any fatal error from cloning or either phase
    """
    console = get_console()

    with cloned_repository(clone_url, work_dir=work_dir, timeout=timeout) as remote_root:
        console.print_clone(clone_url.redacted, str(remote_root))

        local = verify_local(requirement, local_root, timeout=timeout)
        console.print_phase_result(local)

        remote = verify_remote(requirement, remote_root, timeout=timeout)
        console.print_phase_result(remote)

    return RunResult(local=local, remote=remote, policy=policy)
