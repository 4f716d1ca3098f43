"""Console output formatting utilities for journal-verify."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Optional

from ..errors import VerificationError

if TYPE_CHECKING:
    from ..model import JournalRequirement
    from ..verifier import VerificationReport, Violation


SUCCESS_MESSAGE = "Conformance requirements fulfilled."


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}")
        print("-" * len(title))

    def print_run_started(
        self,
        config: str,
        journal_dir: str,
        tag_count: int,
    ) -> None:
        """Print run start information."""
        print("\nVERIFICATION STARTED")
        print(f"Requirements: {config}")
        print(f"Local journal: {journal_dir}")
        print(f"Tags: {tag_count}")
        print()

    def print_clone(self, url: str, path: str) -> None:
        """Print where the remote copy was cloned to."""
        print(f"CLONED: {url} -> {path}")

    def print_tag_started(self, tag_name: str, mode: str) -> None:
        """Print tag start message."""
        print(f"TAG: {tag_name} ({mode})")

    def print_violation(self, violation: "Violation") -> None:
        """Print a soft failure as it happens."""
        print(str(violation))

    def print_phase_result(self, report: "VerificationReport") -> None:
        """Print the outcome of one verification phase."""
        status = "success" if report.success else f"{len(report.violations)} violation(s)"
        print(f"{report.mode.value} STATUS: {status}")

    def print_success(self) -> None:
        """Print the overall success message."""
        print(SUCCESS_MESSAGE)

    def print_not_fulfilled(self, violation_count: int) -> None:
        """Print the overall failure summary."""
        print(f"Conformance requirements NOT fulfilled ({violation_count} violation(s)).")

    def print_fatal(self, error: VerificationError) -> None:
        """
        Print a fatal verification error.

        The kind-specific message goes first, followed by any captured
        process output (e.g. git's stderr).
        """
        print(str(error))
        for line in error.details():
            print(line)
        self.print_debug(f"error kind: {error.kind}")

    def print_requirement(self, requirement: "JournalRequirement") -> None:
        """Print a summary of a requirement document."""
        for tag in requirement:
            print(f"{tag.tag_name}")
            for f in tag.file_requirements:
                print(f"  {f.file_pathname} ({len(f.regex_messages)} pattern(s))")
                if self.debug:
                    for rm in f.regex_messages:
                        print(f"    /{rm.regex}/  {rm.message}")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"An unexpected error occurred: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
