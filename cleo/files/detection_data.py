"""
Module: detection_data
Purpose: Keyword and pattern tables for the heuristic file detector.
Dependencies: re (patterns only)

Separates detection policy data from detection logic. The tool-response veto
list is hand-maintained and bilingual; edit it here, not in heuristics.py.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Explicit requests: the user asked for a document in so many words
# Matched against the lowercased user message
# ---------------------------------------------------------------------------

EXPLICIT_FILE_REQUESTS: tuple[str, ...] = (
    # Spanish
    "escribe un ensayo", "crea un ensayo", "redacta un ensayo", "hazme un ensayo", "haz un ensayo",
    "escribe un artículo", "crea un artículo", "redacta un artículo", "hazme un artículo",
    "haz un artículo",
    "escribe una historia", "crea una historia", "redacta una historia", "hazme una historia",
    "haz una historia",
    "escribe un cuento", "crea un cuento", "redacta un cuento",
    "escribe un reporte", "crea un reporte", "redacta un reporte", "hazme un reporte",
    "haz un reporte",
    "escribe un informe", "crea un informe", "redacta un informe", "hazme un informe",
    "haz un informe",
    "escribe un documento", "crea un documento", "redacta un documento", "hazme un documento",
    "haz un documento",
    "escribe una guía", "crea una guía", "redacta una guía",
    "escribe un manual", "crea un manual", "redacta un manual",
    "escribe un tutorial", "crea un tutorial", "redacta un tutorial",
    "genera un archivo", "crea un archivo", "guarda en archivo",
    "exporta a archivo", "descarga como archivo",
    "archivo .md", "archivo .txt", "archivo markdown",
    "documento editable", "texto editable",
    # English
    "write an essay", "create an essay", "draft an essay", "make me an essay", "make an essay",
    "write an article", "create an article", "draft an article", "make me an article",
    "make an article",
    "write a story", "create a story", "draft a story", "make me a story", "make a story",
    "write a report", "create a report", "draft a report", "make me a report", "make a report",
    "write a document", "create a document", "draft a document", "make me a document",
    "make a document",
    "write a guide", "create a guide", "draft a guide", "make me a guide", "make a guide",
    "write a manual", "create a manual", "draft a manual", "make me a manual", "make a manual",
    "write a tutorial", "create a tutorial", "draft a tutorial", "make me a tutorial",
    "make a tutorial",
    "generate a file", "create a file", "save as file",
    "export to file", "download as file",
    "file .md", "file .txt", "markdown file",
    "editable document", "editable text",
)

# Signatures an agent leaves when it decided on its own to emit a file
HIDDEN_MARKER_SIGNATURES: tuple[str, ...] = ("<!--FILE:", "[CREAR_ARCHIVO]")

# "largo" / "long" as a whole word in the user message
LONG_REQUEST_PATTERN = re.compile(r"\b(?:largo|long)\b", re.IGNORECASE)

# ---------------------------------------------------------------------------
# Tool-response veto: structured tool output stays inline in chat
# Matched case-sensitively against the candidate text
# ---------------------------------------------------------------------------

TOOL_RESPONSE_PHRASES: tuple[str, ...] = (
    # Spanish
    "Encontré",
    "archivos:",
    "carpetas:",
    "eventos:",
    "resultados:",
    "He revisado",
    "Tienes **",
    "¿Qué te gustaría hacer?",
    "Haz clic en cualquier",
    "¿Te ayudo con",
    "¿Necesitas que",
    "Puedo ayudarte",
    "modificado ayer",
    "Sugerencias: Organiza",
    # English
    "I found",
    "files:",
    "folders:",
    "events:",
    "results:",
    "I reviewed",
    "You have **",
    "What would you like to do?",
    "Click on any",
    "Can I help you with",
    "Do you need me to",
    "I can help you",
    "modified yesterday",
    "Suggestions: Organize",
    # Emoji markers (language independent)
    "📄 **",
    "📊 **",
    "📅 **",
    "🌟 **Hoy**",
    "🌟 **Today**",
    "⭐ **Mañana**",
    "⭐ **Tomorrow**",
    "📁",
    "🖼️",
    "📍",
    "👥",
)

# Storage summaries ("3 files, 12 MB total")
TOOL_RESPONSE_PHRASE_PAIRS: tuple[tuple[str, str], ...] = (("total", "MB"),)

# Calendar-style markdown table headers
TOOL_RESPONSE_TABLE_HEADERS: tuple[str, ...] = (
    "Hora",
    "Evento",
    "Duración",
    "Ubicación",
    "Asistentes",
    "Recordatorios",
    "Estado",
)

TOOL_RESPONSE_PATTERNS: tuple[re.Pattern[str], ...] = (
    *(re.compile(rf"\|\s*{re.escape(header)}\s*\|") for header in TOOL_RESPONSE_TABLE_HEADERS),
    # "**5** archivos", "**2** events"
    re.compile(
        r"\*\*\d+\*\*\s+(?:archivo|evento|documento|file|event|document|folder|carpeta)",
        re.IGNORECASE,
    ),
)

# ---------------------------------------------------------------------------
# Filename prefixes, first match wins (order matters)
# ---------------------------------------------------------------------------

DOCUMENT_TYPE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("ensayo", ("ensayo", "essay")),
    ("historia", ("historia", "cuento", "story")),
    ("articulo", ("artículo", "articulo", "article")),
    ("reporte", ("reporte", "informe", "report")),
    ("guia", ("guía", "guia", "tutorial", "guide")),
    ("carta", ("carta", "email", "letter")),
)
DEFAULT_DOCUMENT_TYPE = "documento"
