# model.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath, PureWindowsPath
from typing import Iterator


def check_relative_path(file_pathname: str) -> str:
    """
    Return `file_pathname` if it stays inside the repository root.

    Raises:
        ValueError: empty, absolute, or containing a ".." segment
    """
    if not file_pathname:
        raise ValueError("file path must not be empty")
    if PurePosixPath(file_pathname).is_absolute() or PureWindowsPath(file_pathname).is_absolute():
        raise ValueError(f"file path must be relative to the repository root, got {file_pathname!r}")
    if ".." in re.split(r"[\\/]", file_pathname):
        raise ValueError(f"file path must not leave the repository root, got {file_pathname!r}")
    return file_pathname


@dataclass(frozen=True)
class RegexMessage:
    """A pattern that must match somewhere in a file, and what to say if it doesn't."""
    regex: str
    message: str


@dataclass(frozen=True)
class FileRequirement:
    """
    A file that must exist under the repository root.

    `file_pathname` is always relative to the repository root.
    """
    file_pathname: str
    regex_messages: tuple[RegexMessage, ...] = ()

    def __post_init__(self) -> None:
        check_relative_path(self.file_pathname)


@dataclass(frozen=True)
class TagRequirement:
    """A tag expected to exist once all of its file requirements hold."""
    tag_name: str
    file_requirements: tuple[FileRequirement, ...] = ()

    def __post_init__(self) -> None:
        if not self.tag_name:
            raise ValueError("tag_name must not be empty")


@dataclass(frozen=True)
class JournalRequirement:
    """
    The full compliance contract for a journal repository.

    Tags are verified in the order they appear here, which is also the
    order of console output.
    """
    tag_requirements: tuple[TagRequirement, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[TagRequirement]:
        return iter(self.tag_requirements)

    def __len__(self) -> int:
        return len(self.tag_requirements)

    @property
    def tag_names(self) -> list[str]:
        return [t.tag_name for t in self.tag_requirements]
