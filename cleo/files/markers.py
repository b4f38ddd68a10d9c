"""
Hidden marker extraction.

The agent prompt lets the model wrap a document in one of several marker
syntaxes so it opens in the canvas editor instead of the chat transcript:

    <!-- GENERATED_DOCUMENT: name.md          <<<FILE:name.md
    ...content...                             ...content...
    END_GENERATED_DOCUMENT -->                >>>END_FILE

    <!--FILE:name.md|Optional description-->
    ...content...
    <!--/FILE-->

Matchers run in MarkerKind order. A match that overlaps a block already
claimed by an earlier matcher is skipped. Unmatched or malformed syntax is
left alone as ordinary chat text; nothing here raises.

Each matcher finds an opening tag and then searches for its closing tag
separately. Opening tags never span lines or cross another "<", so a scan
stays linear in the length of the response however many unclosed tags it
carries.
"""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass

from cleo.files.naming import (
    count_words,
    detect_file_type,
    file_type_from_filename,
    generate_description,
    generate_filename,
    resolve_filename,
    sanitize_filename,
)
from cleo.files.types import FileCandidate, FileOrigin, HiddenDocument, MarkerKind
from cleo.observability.logging import get_logger

logger = get_logger(__name__)

# One tag field: stops at "|", newline, "<" or a "-->" close
_TAG_FIELD = r"(?:(?!-->)[^\n|<])"
_FILE_CLOSE = re.compile(r"<!--\s*/FILE\s*-->")


@dataclass(frozen=True)
class MarkerMatcher:
    """
    One marker syntax.

    opening captures "name" and, where the syntax has one, "description".
    Content runs from the end of the opening tag to the first closing tag.
    """

    kind: MarkerKind
    opening: re.Pattern[str]
    closing: re.Pattern[str]
    # Unclosed blocks run to end of text instead of being ignored
    open_ended: bool = False


MATCHERS: tuple[MarkerMatcher, ...] = (
    MarkerMatcher(
        kind=MarkerKind.GENERATED_DOCUMENT,
        opening=re.compile(r"<!--\s*GENERATED_DOCUMENT:(?P<name>[^\n<>]+)\n"),
        closing=re.compile(r"\nEND_GENERATED_DOCUMENT\s*-->"),
    ),
    MarkerMatcher(
        kind=MarkerKind.ANGLE_FILE,
        opening=re.compile(r"<<<FILE:(?P<name>[^\n<>]+)\n"),
        closing=re.compile(r"\n>>>END_FILE"),
    ),
    MarkerMatcher(
        kind=MarkerKind.FILE_COMMENT,
        opening=re.compile(
            rf"<!--\s*FILE:(?P<name>{_TAG_FIELD}++)"
            rf"(?:\|(?P<description>{_TAG_FIELD}*+))?\|?[ \t]*+-->"
        ),
        closing=_FILE_CLOSE,
    ),
    # Opening tag without its closing tag, or without "-->": the tag ends at
    # a second "|" or at end of line
    MarkerMatcher(
        kind=MarkerKind.FILE_COMMENT_LOOSE,
        opening=re.compile(
            rf"<!--\s*FILE:(?P<name>{_TAG_FIELD}++)"
            rf"(?:\|(?P<description>{_TAG_FIELD}*+))?(?:-->)?"
            r"(?:\|[ \t]*+\n?|[ \t]*+(?:\n|\Z))"
        ),
        closing=_FILE_CLOSE,
        open_ended=True,
    ),
)


class _ClaimedSpans:
    """Disjoint [start, end) spans, sorted by start."""

    def __init__(self) -> None:
        self._starts: list[int] = []
        self._ends: list[int] = []

    def end_covering(self, pos: int) -> int | None:
        i = bisect.bisect_right(self._starts, pos) - 1
        if i >= 0 and pos < self._ends[i]:
            return self._ends[i]
        return None

    def overlaps(self, start: int, end: int) -> bool:
        i = bisect.bisect_right(self._starts, start)
        if i > 0 and self._ends[i - 1] > start:
            return True
        return i < len(self._starts) and self._starts[i] < end

    def add(self, start: int, end: int) -> None:
        i = bisect.bisect_right(self._starts, start)
        self._starts.insert(i, start)
        self._ends.insert(i, end)


def _build_candidate(
    raw_name: str,
    raw_description: str | None,
    raw_content: str,
    user_message: str | None,
) -> FileCandidate:
    content = raw_content.strip()
    filename = resolve_filename(raw_name, content, user_message)
    description = (raw_description or "").strip() or generate_description(content, user_message)
    file_type = file_type_from_filename(filename) or detect_file_type(content, user_message)

    return FileCandidate(
        content=content,
        filename=filename,
        description=description,
        file_type=file_type,
        word_count=count_words(content),
        origin=FileOrigin.HIDDEN_MARKER,
    )


def extract_hidden_documents(text: str, user_message: str | None = None) -> list[HiddenDocument]:
    """
    Find every marker block in text.

    Args:
        text: Raw assistant response
        user_message: Originating user message (used for synthesized names
                      and descriptions)

    Returns:
        Matches in MarkerKind priority order, then text position.
    """
    results: list[HiddenDocument] = []
    claimed = _ClaimedSpans()

    for matcher in MATCHERS:
        pos = 0
        # First closing tag at or after closing_from; reused while it still
        # follows the current opening tag
        closing: re.Match[str] | None = None
        closing_from = -1

        while True:
            opening = matcher.opening.search(text, pos)
            if opening is None:
                break

            start = opening.start()
            covered_until = claimed.end_covering(start)
            if covered_until is not None:
                pos = covered_until
                continue

            if (
                closing_from < 0
                or opening.end() < closing_from
                or (closing is not None and closing.start() < opening.end())
            ):
                closing = matcher.closing.search(text, opening.end())
                closing_from = opening.end()

            if closing is not None:
                content_end, end = closing.span()
            elif matcher.open_ended:
                content_end = end = len(text)
            else:
                # No closing tag anywhere after this opening, or any later one
                break

            if claimed.overlaps(start, end):
                pos = start + 1
                continue

            candidate = _build_candidate(
                opening.group("name"),
                opening.groupdict().get("description"),
                text[opening.end() : content_end],
                user_message,
            )
            results.append(
                HiddenDocument(
                    raw_block=text[start:end],
                    start=start,
                    end=end,
                    kind=matcher.kind,
                    candidate=candidate,
                )
            )
            claimed.add(start, end)
            logger.debug(
                "Hidden marker %s matched at %d-%d: %s (%d words)",
                matcher.kind.value,
                start,
                end,
                candidate.filename,
                candidate.word_count,
            )
            pos = end

    return results


def remove_blocks(text: str, documents: list[HiddenDocument]) -> str:
    """Delete every matched raw block from text, leaving the rest untouched."""
    if not documents:
        return text

    pieces: list[str] = []
    cursor = 0
    for doc in sorted(documents, key=lambda d: d.start):
        pieces.append(text[cursor : doc.start])
        cursor = doc.end
    pieces.append(text[cursor:])
    return "".join(pieces)


def extract_file_markers(
    text: str, user_message: str | None = None
) -> tuple[str, list[FileCandidate]]:
    """
    Pull marker blocks out of a response.

    Returns:
        (clean_text, candidates) - text with all matched blocks deleted and
        one hidden-marker candidate per block.
    """
    documents = extract_hidden_documents(text, user_message)
    return remove_blocks(text, documents), [doc.candidate for doc in documents]


def _marker_safe(value: str) -> str:
    # Without "<" or ">" no "-->" or "<!--" can form inside the tag
    value = value.replace("|", "-").replace("<", "").replace(">", "")
    return " ".join(line.strip() for line in value.splitlines() if line.strip())


def create_file_marker(
    content: str,
    filename: str | None = None,
    description: str | None = None,
) -> str:
    """
    Wrap content in a <!--FILE:...--> block that extract_file_markers reads back.

    Missing filename or description are synthesized from the content.
    """
    name = sanitize_filename(filename) if filename else ""
    name = _marker_safe(name or generate_filename(content))
    desc = _marker_safe(description or generate_description(content))

    return f"<!--FILE:{name}|{desc}-->\n{content}\n<!--/FILE-->"
