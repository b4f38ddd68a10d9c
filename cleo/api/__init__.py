"""Cleo files HTTP API."""

from __future__ import annotations

import os


def main() -> None:
    """Run the API with uvicorn (console script: cleo-api)."""
    import uvicorn

    uvicorn.run(
        "cleo.api.app:app",
        host=os.getenv("CLEO_HOST", "127.0.0.1"),
        port=int(os.getenv("CLEO_PORT", "8000")),
        reload=os.getenv("CLEO_ENV", "development") == "development",
    )
