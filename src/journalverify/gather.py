# gather.py
from __future__ import annotations

from typing import Callable, Optional

import click

from .model import FileRequirement, JournalRequirement, RegexMessage, TagRequirement, check_relative_path

Prompt = Callable[[str], Optional[str]]


def prompt_line(prompt: str) -> Optional[str]:
    """Ask for one line; an empty answer means "done" and returns None."""
    line = click.prompt(prompt, default="", show_default=False, prompt_suffix="-> ")
    return line or None


def gather_requirement(ask: Prompt = prompt_line) -> JournalRequirement:
    """
    Build a JournalRequirement interactively.

    Three nested levels: tags, then files per tag, then regex/message pairs
    per file. An empty answer ends the current level. A regex whose message
    is left empty is dropped. A file path outside the repository is
    rejected and asked for again.
    """
    tags: list[TagRequirement] = []
    while True:
        tag_name = ask("Enter tag name (or <RETURN> to end)")
        if tag_name is None:
            break
        files: list[FileRequirement] = []
        while True:
            file_pathname = ask("Enter filePathname (or <RETURN> to end)")
            if file_pathname is None:
                break
            try:
                check_relative_path(file_pathname)
            except ValueError as e:
                click.echo(str(e))
                continue
            pairs: list[RegexMessage] = []
            while True:
                regex = ask("Enter regex (or <RETURN> to end)")
                if regex is None:
                    break
                message = ask("Enter message for regex (or <RETURN> to end)")
                if message is not None:
                    pairs.append(RegexMessage(regex=regex, message=message))
            files.append(FileRequirement(file_pathname=file_pathname, regex_messages=tuple(pairs)))
        tags.append(TagRequirement(tag_name=tag_name, file_requirements=tuple(files)))
    return JournalRequirement(tag_requirements=tuple(tags))
