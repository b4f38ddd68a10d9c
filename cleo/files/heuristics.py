"""
Heuristic file-candidate detection.

Fallback used when a response carries no hidden marker: decide from text
shape alone whether a long answer should be offered as a downloadable file.

Criteria are deliberately strict. A file is only proposed when the user asked
for a document explicitly, the text still carries a marker signature, or the
text is very long AND the user asked for something long. Structured tool
output (Drive listings, calendar tables) always stays inline in chat.

Keyword tables live in detection_data.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cleo.config import LONG_TEXT_WORDS
from cleo.files.detection_data import (
    EXPLICIT_FILE_REQUESTS,
    HIDDEN_MARKER_SIGNATURES,
    LONG_REQUEST_PATTERN,
    TOOL_RESPONSE_PATTERNS,
    TOOL_RESPONSE_PHRASE_PAIRS,
    TOOL_RESPONSE_PHRASES,
)
from cleo.files.naming import (
    count_words,
    detect_file_type,
    generate_description,
    generate_filename,
)
from cleo.files.types import FileCandidate, FileOrigin
from cleo.observability.logging import get_logger

logger = get_logger(__name__)


class DetectionReason(str, Enum):
    """Which rule decided the outcome."""

    EXPLICIT_REQUEST = "explicit_request"
    HIDDEN_SIGNATURE = "hidden_signature"
    LONG_REQUEST = "long_request"
    TOOL_RESPONSE = "tool_response"
    NO_SIGNAL = "no_signal"

    @property
    def creates_file(self) -> bool:
        return self not in (DetectionReason.TOOL_RESPONSE, DetectionReason.NO_SIGNAL)


@dataclass
class DetectionDecision:
    """Why the detector did or did not propose a file."""

    should_create: bool
    reason: DetectionReason
    word_count: int
    line_count: int


def user_requested_file(user_message: str | None) -> bool:
    """True when the user message contains an explicit document request."""
    message = (user_message or "").lower()
    return any(phrase in message for phrase in EXPLICIT_FILE_REQUESTS)


def has_marker_signature(text: str) -> bool:
    return any(signature in text for signature in HIDDEN_MARKER_SIGNATURES)


def is_tool_response(text: str) -> bool:
    """
    True when text looks like a structured tool result.

    Checks the bilingual phrase list, storage summaries ("total" + "MB"),
    emoji markers, calendar table headers and "**N** item" counts.
    """
    if any(phrase in text for phrase in TOOL_RESPONSE_PHRASES):
        return True
    if any(all(part in text for part in pair) for pair in TOOL_RESPONSE_PHRASE_PAIRS):
        return True
    return any(pattern.search(text) for pattern in TOOL_RESPONSE_PATTERNS)


def evaluate(text: str, user_message: str | None = None) -> DetectionDecision:
    """
    Run the detection rules in order.

    Rules:
        1. Explicit request phrase in the user message -> create
        2. Hidden marker signature in the text -> create
        3. >= LONG_TEXT_WORDS words and user said "largo"/"long" -> create
        4. Otherwise -> don't create
    The tool-response veto overrides all of the above.
    """
    word_count = count_words(text)
    line_count = len(text.split("\n"))

    if is_tool_response(text):
        reason = DetectionReason.TOOL_RESPONSE
    elif user_requested_file(user_message):
        reason = DetectionReason.EXPLICIT_REQUEST
    elif has_marker_signature(text):
        reason = DetectionReason.HIDDEN_SIGNATURE
    elif word_count >= LONG_TEXT_WORDS and LONG_REQUEST_PATTERN.search(user_message or ""):
        reason = DetectionReason.LONG_REQUEST
    else:
        reason = DetectionReason.NO_SIGNAL

    return DetectionDecision(
        should_create=reason.creates_file,
        reason=reason,
        word_count=word_count,
        line_count=line_count,
    )


def detect_file_content(text: str, user_message: str | None = None) -> FileCandidate | None:
    """
    Propose text as a downloadable file.

    Args:
        text: Assistant response (unmodified)
        user_message: Message the response answers

    Returns:
        Auto-detected FileCandidate, or None when no file should be created.
    """
    decision = evaluate(text, user_message)
    if not decision.should_create:
        if decision.reason is DetectionReason.TOOL_RESPONSE:
            logger.debug("Heuristic detection vetoed: tool response (%d words)", decision.word_count)
        return None

    file_type = detect_file_type(text, user_message)
    candidate = FileCandidate(
        content=text,
        filename=generate_filename(text, user_message, file_type=file_type),
        description=generate_description(text, user_message),
        file_type=file_type,
        word_count=decision.word_count,
        origin=FileOrigin.AUTO_DETECT,
    )
    logger.info(
        "Heuristic file candidate: %s (%s, %d words, %d lines)",
        candidate.filename,
        decision.reason.value,
        decision.word_count,
        decision.line_count,
    )
    return candidate
