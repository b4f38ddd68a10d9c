"""Cleo files - turn assistant responses into chat text and downloadable documents"""

from __future__ import annotations

__version__ = "1.0.0"


# Lazy imports so "import cleo" stays cheap for config/logging users
def __getattr__(name: str):
    if name in ("FileCandidate", "FileOrigin", "FileType", "ProcessedResponse"):
        from cleo.files import types

        return getattr(types, name)

    if name == "process_response_for_files":
        from cleo.files.processor import process_response_for_files

        return process_response_for_files

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "FileCandidate",
    "FileOrigin",
    "FileType",
    "ProcessedResponse",
    "process_response_for_files",
]
