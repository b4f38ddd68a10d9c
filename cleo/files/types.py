"""
Module: types
Purpose: Shared domain types for response post-processing.
Dependencies: None (stdlib only)

Stable import boundary: markers, heuristics, naming, processor and the API
routes all use these types. Keeping them in a leaf module prevents circular
imports between the detection modules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FileType(str, Enum):
    """Document format of a candidate.

    Extends str so JSON serialization produces raw strings (e.g. "md").
    """

    MD = "md"
    TXT = "txt"
    DOC = "doc"

    @property
    def extension(self) -> str:
        return f".{self.value}"


class FileOrigin(str, Enum):
    """How a candidate was found. Diagnostics only."""

    AUTO_DETECT = "auto-detect"
    HIDDEN_MARKER = "hidden-marker"


class MarkerKind(str, Enum):
    """Hidden marker syntaxes, declared in extraction priority order."""

    GENERATED_DOCUMENT = "generated_document"  # <!-- GENERATED_DOCUMENT: ... END_GENERATED_DOCUMENT -->
    ANGLE_FILE = "angle_file"  # <<<FILE: ... >>>END_FILE
    FILE_COMMENT = "file_comment"  # <!--FILE:name|desc--> ... <!--/FILE-->
    FILE_COMMENT_LOOSE = "file_comment_loose"  # opening tag missing -->


# ---------------------------------------------------------------------------
# Candidate
# ---------------------------------------------------------------------------


@dataclass
class FileCandidate:
    """A proposed file extracted or detected from a response, not yet persisted."""

    content: str
    filename: str
    description: str
    file_type: FileType
    word_count: int
    origin: FileOrigin
    should_create_file: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the chat UI consumes."""
        return {
            "content": self.content,
            "filename": self.filename,
            "description": self.description,
            "fileType": self.file_type.value,
            "wordCount": self.word_count,
            "shouldCreateFile": self.should_create_file,
            "origin": self.origin.value,
        }


# ---------------------------------------------------------------------------
# Marker extraction result (from markers.py)
# ---------------------------------------------------------------------------


@dataclass
class HiddenDocument:
    """One matched marker block and the candidate built from it."""

    raw_block: str
    start: int
    end: int
    kind: MarkerKind
    candidate: FileCandidate


# ---------------------------------------------------------------------------
# Post-processing result (from processor.py)
# ---------------------------------------------------------------------------


@dataclass
class ProcessedResponse:
    """Chat text with marker blocks removed, plus the candidates found."""

    clean_response: str
    files: list[FileCandidate] = field(default_factory=list)

    @property
    def has_files(self) -> bool:
        return bool(self.files)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cleanResponse": self.clean_response,
            "files": [f.to_dict() for f in self.files],
        }
