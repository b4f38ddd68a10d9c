"""Centralized configuration for the Cleo file post-processor.

Typed constants with environment variable overrides. Every value has a safe
default so the library and API start without extra env configuration.
"""

from __future__ import annotations

import os

# --- App ---
APP_VERSION: str = "1.0.0"
APP_ENV: str = os.getenv("CLEO_ENV", "development")

# --- Detection ---
# Responses longer than this are passed through untouched (bounds regex cost)
MAX_SCAN_CHARS: int = int(os.getenv("CLEO_MAX_SCAN_CHARS", "500000"))
LONG_TEXT_WORDS: int = int(os.getenv("CLEO_LONG_TEXT_WORDS", "1000"))
TITLE_SOURCE_CHARS: int = 50
TITLE_SLUG_MAX_LEN: int = 30
DESCRIPTION_PROMPT_CHARS: int = 80
DESCRIPTION_FIRST_LINE_CHARS: int = 100

# --- Call limiting ---
CALL_LIMIT_MAX: int = int(os.getenv("CLEO_CALL_LIMIT_MAX", "6"))
CALL_LIMIT_WINDOW_SECONDS: float = float(os.getenv("CLEO_CALL_LIMIT_WINDOW", "15"))
CACHE_MAXSIZE: int = int(os.getenv("CLEO_CACHE_MAXSIZE", "10000"))
