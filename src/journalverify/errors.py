# errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


# ----------------------------------------------------------------------
# Fatal errors
# ----------------------------------------------------------------------
# Anything raised from here aborts the whole run and is reported once at the
# top level. Regex mismatches are NOT errors, see verifier.Violation.


class VerificationError(Exception):
    """Base class for every fatal verification error."""

    kind = "verification"

    def details(self) -> list[str]:
        """Extra lines (usually captured stderr) shown below the message."""
        return []


# ---- configuration ----

@dataclass
class CredentialsFileMissing(VerificationError):
    path: str
    kind = "credentials_missing"

    def __str__(self) -> str:
        return f"The git credentials file was not found: {self.path}"


@dataclass
class CredentialsJournalCount(VerificationError):
    actual_count: int
    marker: str = "journal"
    kind = "credentials_journal_count"

    def __str__(self) -> str:
        return (
            f"Failed to find exactly one {self.marker} entry in git credential file; "
            f"found {self.actual_count} instead"
        )


@dataclass
class RepositoryURLUnparseable(VerificationError):
    reason: str = ""
    kind = "url_unparseable"

    def __str__(self) -> str:
        msg = "Failed to parse the repository URL in the git credential entry"
        return f"{msg} ({self.reason})" if self.reason else msg


@dataclass
class RepositoryURLLacksUsername(VerificationError):
    kind = "url_lacks_username"

    def __str__(self) -> str:
        return "Failed to find the username in the git credential entry"


@dataclass
class RepositoryURLLacksPassword(VerificationError):
    kind = "url_lacks_password"

    def __str__(self) -> str:
        return "Failed to find the password in the git credential entry"


@dataclass
class RequirementDocumentInvalid(VerificationError):
    path: str
    problems: list[str] = field(default_factory=list)
    kind = "document_invalid"

    def __str__(self) -> str:
        return f"The requirement document is not valid: {self.path}"

    def details(self) -> list[str]:
        return list(self.problems)


# ---- processes ----

@dataclass
class ProcessLaunchFailed(VerificationError):
    executable: str
    reason: str
    kind = "launch_failed"

    def __str__(self) -> str:
        return f"Failed to launch {self.executable}: {self.reason}"


@dataclass
class ProcessTimedOut(VerificationError):
    command: str
    timeout: float
    kind = "timed_out"

    def __str__(self) -> str:
        return f"Command timed out after {self.timeout:g}s: {self.command}"


@dataclass
class CloneFailed(VerificationError):
    error_message: Optional[str] = None
    kind = "clone_failed"

    def __str__(self) -> str:
        return "Failed to clone repository"

    def details(self) -> list[str]:
        return [self.error_message] if self.error_message else []


@dataclass
class CheckoutFailed(VerificationError):
    tag_name: str
    error_message: Optional[str] = None
    kind = "checkout_failed"

    def __str__(self) -> str:
        return f"Failed to checkout repository at tag {self.tag_name}"

    def details(self) -> list[str]:
        return [self.error_message] if self.error_message else []


# ---- content ----

@dataclass
class LocalFileNotPresent(VerificationError):
    file_pathname: str
    kind = "local_file_missing"

    def __str__(self) -> str:
        return f"Required LOCAL file not present: {self.file_pathname}"


@dataclass
class RemoteFileNotPresent(VerificationError):
    file_pathname: str
    kind = "remote_file_missing"

    def __str__(self) -> str:
        return f"Required REMOTE file not present: {self.file_pathname}"


@dataclass
class LocalTagNotPresent(VerificationError):
    tag_name: str
    error_message: Optional[str] = None
    kind = "local_tag_missing"

    def __str__(self) -> str:
        return f"The required LOCAL tag {self.tag_name} was not found"

    def details(self) -> list[str]:
        return [self.error_message] if self.error_message else []
