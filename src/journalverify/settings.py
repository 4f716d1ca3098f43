from __future__ import annotations
import os

CONFIG_PATH = os.environ.get("JOURNAL_VERIFY_CONFIG", "journalVerification.config")
JOURNAL_DIR = os.environ.get("JOURNAL_VERIFY_JOURNAL_DIR", os.path.join("~", "Journals"))
CREDENTIALS_PATH = os.environ.get("JOURNAL_VERIFY_CREDENTIALS", os.path.join("~", ".git-credentials"))
CREDENTIALS_MARKER = os.environ.get("JOURNAL_VERIFY_MARKER", "journal")
GIT_EXECUTABLE = os.environ.get("JOURNAL_VERIFY_GIT", "git")
# kept as text; parsed on use so a bad value can't break import
PROCESS_TIMEOUT = os.environ.get("JOURNAL_VERIFY_TIMEOUT", "5")
WORK_DIR = os.environ.get("JOURNAL_VERIFY_WORK_DIR", ".")


def process_timeout() -> float:
    try:
        return float(PROCESS_TIMEOUT)
    except ValueError:
        raise ValueError(
            f"JOURNAL_VERIFY_TIMEOUT must be a number of seconds, got {PROCESS_TIMEOUT!r}"
        ) from None
