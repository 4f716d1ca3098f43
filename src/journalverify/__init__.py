from .model import FileRequirement, JournalRequirement, RegexMessage, TagRequirement
from .process import CompletionStatus, TerminationKind, run_process
from .runner import ResultPolicy, run_verification
from .verifier import Mode, VerificationReport, Violation, verify_local, verify_remote

__all__ = [
    "FileRequirement",
    "JournalRequirement",
    "RegexMessage",
    "TagRequirement",
    "CompletionStatus",
    "TerminationKind",
    "run_process",
    "ResultPolicy",
    "run_verification",
    "Mode",
    "VerificationReport",
    "Violation",
    "verify_local",
    "verify_remote",
]
