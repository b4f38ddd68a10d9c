"""
Filename, description and file-type synthesis for file candidates.

Shared by the marker extractor and the heuristic detector. Every function here
is total over strings: bad input yields a synthesized value, never an error.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date

from cleo.config import (
    DESCRIPTION_FIRST_LINE_CHARS,
    DESCRIPTION_PROMPT_CHARS,
    TITLE_SLUG_MAX_LEN,
    TITLE_SOURCE_CHARS,
)
from cleo.files.detection_data import DEFAULT_DOCUMENT_TYPE, DOCUMENT_TYPE_KEYWORDS
from cleo.files.types import FileType

_RECOGNIZED_EXTENSION = re.compile(r"\.(md|txt|doc)$", re.IGNORECASE)
_HEADING = re.compile(r"^\s*#{1,2}\s+(.+)$")
_SLUG_STRIP = re.compile(r"[^\w\s-]", re.ASCII)
_FILENAME_STRIP = re.compile(r"[^\w\s.-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")


def count_words(text: str) -> int:
    """Whitespace-delimited token count."""
    return len(text.split())


def _ascii_fold(value: str) -> str:
    # "climático" -> "climatico" before the ASCII-only strip
    normalized = unicodedata.normalize("NFKD", value)
    return normalized.encode("ascii", "ignore").decode("ascii")


def slugify(value: str, max_len: int | None = None) -> str:
    """
    Lowercase, dash-separated, ASCII-only slug.

    Examples:
        "Cambio Climático: 2025" -> "cambio-climatico-2025"
        "   " -> ""
    """
    slug = _SLUG_STRIP.sub("", _ascii_fold(value)).strip()
    slug = _WHITESPACE.sub("-", slug).lower()
    if max_len is not None:
        slug = slug[:max_len]
    return slug.strip("-")


def sanitize_filename(name: str) -> str:
    """
    Normalize a filename supplied inside a marker.

    Names with a recognized extension (.md/.txt/.doc) keep their stem and get
    a lowercase extension. Anything else is slugified and gets ".md" appended.
    Directory components are dropped.

    Returns:
        Sanitized filename, or "" when nothing usable remains (caller
        should synthesize one).
    """
    name = re.split(r"[\\/]", name.strip())[-1].strip()
    if not name:
        return ""

    match = _RECOGNIZED_EXTENSION.search(name)
    if match:
        stem = name[: match.start()].strip()
        if not stem.strip(".-"):
            return ""
        return f"{stem}.{match.group(1).lower()}"

    slug = _FILENAME_STRIP.sub("", _ascii_fold(name)).strip()
    slug = _WHITESPACE.sub("-", slug).lower()
    if not slug.strip(".-"):
        return ""
    return f"{slug}.md"


def detect_document_type(user_message: str | None) -> str:
    """Filename prefix for the kind of document the user asked for."""
    message = (user_message or "").lower()
    for doc_type, keywords in DOCUMENT_TYPE_KEYWORDS:
        if any(keyword in message for keyword in keywords):
            return doc_type
    return DEFAULT_DOCUMENT_TYPE


def _extract_title(text: str) -> str:
    lines = [line for line in text.split("\n") if line.strip()]
    for line in lines:
        match = _HEADING.match(line)
        if match:
            return match.group(1).strip()
    if lines:
        return lines[0][:TITLE_SOURCE_CHARS].strip()
    return ""


def generate_filename(
    text: str,
    user_message: str | None = None,
    file_type: FileType = FileType.MD,
    today: date | None = None,
) -> str:
    """
    Build "<doctype>-<title>-<dd-mm-yyyy>.<ext>" for a document.

    The title comes from the first markdown H1/H2 heading, else the first
    non-empty line. Without a usable title the middle part is omitted.
    """
    stamp = (today or date.today()).strftime("%d-%m-%Y")
    doc_type = detect_document_type(user_message)
    title = slugify(_extract_title(text), max_len=TITLE_SLUG_MAX_LEN)

    if title:
        return f"{doc_type}-{title}-{stamp}{file_type.extension}"
    return f"{doc_type}-{stamp}{file_type.extension}"


def resolve_filename(raw_name: str, content: str, user_message: str | None = None) -> str:
    """Sanitized marker filename, falling back to a synthesized one."""
    return sanitize_filename(raw_name) or generate_filename(content, user_message)


def generate_description(text: str, user_message: str | None = None) -> str:
    """Short summary referencing the user request, or the opening line."""
    word_count = count_words(text)

    if user_message:
        prompt = user_message[:DESCRIPTION_PROMPT_CHARS]
        return f'Documento generado basado en: "{prompt}..." ({word_count} palabras)'

    first_line = text.split("\n")[0][:DESCRIPTION_FIRST_LINE_CHARS]
    return f'Documento con {word_count} palabras. Inicia con: "{first_line}..."'


def detect_file_type(text: str, user_message: str | None = None) -> FileType:
    """
    Infer the document format.

    Priority: markdown syntax in the content, then an extension the user
    asked for, then markdown by default.
    """
    if "# " in text or "**" in text or "*" in text:
        return FileType.MD

    message = (user_message or "").lower()
    if ".md" in message or "markdown" in message:
        return FileType.MD
    if ".txt" in message:
        return FileType.TXT
    if ".doc" in message:
        return FileType.DOC

    return FileType.MD


def file_type_from_filename(filename: str) -> FileType | None:
    match = _RECOGNIZED_EXTENSION.search(filename)
    if not match:
        return None
    return FileType(match.group(1).lower())
