# process.py
# Spawn a child process, optionally feed it stdin, and wait for it with a
# wall-clock timeout. Knows nothing about git.

from __future__ import annotations

import enum
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .errors import ProcessLaunchFailed

DEFAULT_TIMEOUT = 5.0  # seconds


class TerminationKind(enum.Enum):
    EXITED = "exited"
    SIGNALED = "signaled"


@dataclass(frozen=True)
class CompletionStatus:
    """
    Outcome of one process invocation.

    When `timed_out` is True every other field is None: the process was
    killed and its pipes were never drained.
    """
    timed_out: bool
    termination_code: Optional[int] = None
    termination_kind: Optional[TerminationKind] = None
    stdout: Optional[str] = None
    stderr: Optional[str] = None

    @classmethod
    def timeout(cls) -> CompletionStatus:
        return cls(timed_out=True)

    @property
    def ok(self) -> bool:
        return self.succeeded()

    def succeeded(self, ignore_exit_code: bool = False, require_empty_stderr: bool = False) -> bool:
        """
        True if the process exited on its own with status 0.

        Args:
            ignore_exit_code: accept any exit status, as long as the process
                exited rather than being killed by a signal
            require_empty_stderr: additionally require that nothing was
                written to stderr
        """
        if self.timed_out or self.termination_kind is not TerminationKind.EXITED:
            return False
        if not ignore_exit_code and self.termination_code != 0:
            return False
        if require_empty_stderr and self.stderr:
            return False
        return True


def _decode(data: Optional[bytes]) -> Optional[str]:
    # Empty (after trimming) output is reported as absent, not "".
    if not data:
        return None
    text = data.decode("utf-8", errors="replace").strip()
    return text or None


def _termination(returncode: int) -> tuple[int, TerminationKind]:
    # Popen reports "killed by signal N" as -N.
    if returncode < 0:
        return -returncode, TerminationKind.SIGNALED
    return returncode, TerminationKind.EXITED


def run_process(
    executable: str,
    arguments: Sequence[str] = (),
    *,
    stdin_payload: Optional[str] = None,
    cwd: str | Path | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> CompletionStatus:
    """
    Run `executable` with `arguments` and wait at most `timeout` seconds.

    stdout and stderr are always pipes. They are drained concurrently while
    waiting, so a chatty child can't fill a pipe buffer and stall. If
    `stdin_payload` is given it is written as UTF-8 and stdin is then closed;
    otherwise stdin is attached to the null device.

    Raises:
        ProcessLaunchFailed: the executable could not be started (missing,
            not executable, bad working directory)
    """
    argv = [executable, *arguments]
    try:
        proc = subprocess.Popen(
            argv,
            cwd=str(cwd) if cwd is not None else None,
            stdin=subprocess.PIPE if stdin_payload is not None else subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        raise ProcessLaunchFailed(executable=executable, reason=e.strerror or str(e)) from e

    payload = stdin_payload.encode("utf-8") if stdin_payload is not None else None

    try:
        out, err = proc.communicate(input=payload, timeout=timeout)
    except subprocess.TimeoutExpired:
        # Don't drain: a grandchild may still hold the write end open.
        proc.kill()
        for stream in (proc.stdin, proc.stdout, proc.stderr):
            if stream is not None:
                stream.close()
        proc.wait()
        return CompletionStatus.timeout()

    code, kind = _termination(proc.returncode)
    return CompletionStatus(
        timed_out=False,
        termination_code=code,
        termination_kind=kind,
        stdout=_decode(out),
        stderr=_decode(err),
    )
