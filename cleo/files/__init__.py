"""
Cleo files module - detect documents inside assistant responses.
"""

from cleo.files.heuristics import DetectionReason, detect_file_content, is_tool_response
from cleo.files.markers import create_file_marker, extract_file_markers
from cleo.files.processor import generate_file_explanation, process_response_for_files
from cleo.files.types import (
    FileCandidate,
    FileOrigin,
    FileType,
    HiddenDocument,
    MarkerKind,
    ProcessedResponse,
)

__all__ = [
    # Types
    "FileCandidate",
    "FileOrigin",
    "FileType",
    "HiddenDocument",
    "MarkerKind",
    "ProcessedResponse",
    # Markers
    "create_file_marker",
    "extract_file_markers",
    # Heuristics
    "DetectionReason",
    "detect_file_content",
    "is_tool_response",
    # Processor (main entry point)
    "generate_file_explanation",
    "process_response_for_files",
]
