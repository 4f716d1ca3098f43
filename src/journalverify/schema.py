# schema.py
# JSON boundary for the requirement document. The domain model in model.py
# stays plain dataclasses; these pydantic models only validate and
# (de)serialize.
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from .errors import RequirementDocumentInvalid
from .model import FileRequirement, JournalRequirement, RegexMessage, TagRequirement, check_relative_path

# -------------------- Schemas --------------------

class RegexMessageSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    regex: str
    message: str

    @field_validator("regex")
    @classmethod
    def _compiles(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid regex {v!r}: {e}") from e
        return v


class FileRequirementSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    file_pathname: str = Field(alias="filePathname", min_length=1)
    regex_messages: list[RegexMessageSchema] = Field(alias="regexMessages", default_factory=list)

    @field_validator("file_pathname")
    @classmethod
    def _relative(cls, v: str) -> str:
        return check_relative_path(v)


class TagRequirementSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tag_name: str = Field(alias="tagName", min_length=1)
    file_requirements: list[FileRequirementSchema] = Field(alias="fileRequirements", default_factory=list)


class JournalRequirementSchema(BaseModel):
    """The object form written by earlier versions: {"tagRequirements": [...]}."""
    model_config = ConfigDict(extra="forbid")

    tag_requirements: list[TagRequirementSchema] = Field(alias="tagRequirements")


_document = TypeAdapter(Union[list[TagRequirementSchema], JournalRequirementSchema])


# -------------------- Conversion --------------------

def to_model(tags: list[TagRequirementSchema]) -> JournalRequirement:
    return JournalRequirement(
        tag_requirements=tuple(
            TagRequirement(
                tag_name=t.tag_name,
                file_requirements=tuple(
                    FileRequirement(
                        file_pathname=f.file_pathname,
                        regex_messages=tuple(
                            RegexMessage(regex=r.regex, message=r.message) for r in f.regex_messages
                        ),
                    )
                    for f in t.file_requirements
                ),
            )
            for t in tags
        )
    )


def to_document(requirement: JournalRequirement) -> list[dict[str, Any]]:
    """Convert a JournalRequirement to the JSON-ready array form."""
    return [
        {
            "tagName": t.tag_name,
            "fileRequirements": [
                {
                    "filePathname": f.file_pathname,
                    "regexMessages": [
                        {"regex": r.regex, "message": r.message} for r in f.regex_messages
                    ],
                }
                for f in t.file_requirements
            ],
        }
        for t in requirement
    ]


def parse_requirement(data: Any, source: str = "<document>") -> JournalRequirement:
    """
    Validate already-decoded JSON and return the domain model.

    Accepts either a bare array of tag requirements or an object with a
    `tagRequirements` array.

    Raises:
        RequirementDocumentInvalid: with one line per validation problem
    """
    try:
        parsed = _document.validate_python(data)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise RequirementDocumentInvalid(path=source, problems=problems) from e

    tags = parsed.tag_requirements if isinstance(parsed, JournalRequirementSchema) else parsed
    return to_model(tags)


def load_requirement(path: str | Path) -> JournalRequirement:
    """
    Load a requirement document from a UTF-8 JSON file.

    Raises:
        FileNotFoundError: the document does not exist
        RequirementDocumentInvalid: not JSON, or not a valid document
    """
    doc_path = Path(path).expanduser()
    text = doc_path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RequirementDocumentInvalid(path=str(doc_path), problems=[str(e)]) from e
    return parse_requirement(data, source=str(doc_path))


def save_requirement(requirement: JournalRequirement, path: str | Path) -> Path:
    """Persist a requirement document as pretty-printed JSON. Returns the path written."""
    doc_path = Path(path).expanduser()
    doc_path.write_text(json.dumps(to_document(requirement), indent=2) + "\n", encoding="utf-8")
    return doc_path
