"""Pydantic models shared across Cleo API endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cleo.files.types import FileCandidate, FileOrigin, FileType


class ErrorResponse(BaseModel):
    """Body of every 422/429 the API returns. Carries no input values."""

    detail: str
    error_count: int = 1
    invalid_fields: list[str] = []
    retry_after: int | None = None


class FileCandidateModel(BaseModel):
    """
    Wire form of a FileCandidate.

    Serialized with the camelCase keys the chat UI reads; accepts either
    casing on input.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: str
    filename: str
    description: str
    file_type: FileType = Field(alias="fileType")
    word_count: int = Field(alias="wordCount", ge=0)
    should_create_file: bool = Field(default=True, alias="shouldCreateFile")
    origin: FileOrigin = FileOrigin.AUTO_DETECT

    @classmethod
    def from_candidate(cls, candidate: FileCandidate) -> FileCandidateModel:
        return cls(
            content=candidate.content,
            filename=candidate.filename,
            description=candidate.description,
            file_type=candidate.file_type,
            word_count=candidate.word_count,
            should_create_file=candidate.should_create_file,
            origin=candidate.origin,
        )

    def to_candidate(self) -> FileCandidate:
        return FileCandidate(
            content=self.content,
            filename=self.filename,
            description=self.description,
            file_type=self.file_type,
            word_count=self.word_count,
            origin=self.origin,
            should_create_file=self.should_create_file,
        )
