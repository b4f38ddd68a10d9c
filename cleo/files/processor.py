"""
Response post-processing: hidden markers first, heuristics as fallback.

Hidden markers always win. When at least one marker block matched, its
candidates are returned and heuristic detection does not run at all.
"""

from __future__ import annotations

from cleo.config import MAX_SCAN_CHARS
from cleo.files.heuristics import detect_file_content
from cleo.files.markers import extract_hidden_documents, remove_blocks
from cleo.files.types import FileCandidate, ProcessedResponse
from cleo.observability.logging import get_logger
from cleo.observability.telemetry import counter, log_event, time_block

logger = get_logger(__name__)


def process_response_for_files(
    response: str,
    user_message: str | None = None,
    skip_heuristics: bool = False,
    max_scan_chars: int = MAX_SCAN_CHARS,
) -> ProcessedResponse:
    """
    Split an assistant response into chat text and file candidates.

    Args:
        response: Raw assistant response
        user_message: Message the response answers
        skip_heuristics: Only honor explicit hidden markers
        max_scan_chars: Longer responses pass through untouched

    Returns:
        ProcessedResponse with marker blocks removed from clean_response.
        files is empty when nothing qualified.

    Side Effects:
        - Emits files.process.* telemetry events and counters
    """
    if len(response) > max_scan_chars:
        logger.warning(
            "Response too long to scan for files (%d > %d chars), passing through",
            len(response),
            max_scan_chars,
        )
        counter("files.process.oversized")
        return ProcessedResponse(clean_response=response)

    with time_block("files.process.latency"):
        documents = extract_hidden_documents(response, user_message)

        if documents:
            counter("files.process.hidden_marker", len(documents))
            log_event(
                "files.process.hidden_markers",
                count=len(documents),
                kinds=[doc.kind.value for doc in documents],
            )
            return ProcessedResponse(
                clean_response=remove_blocks(response, documents),
                files=[doc.candidate for doc in documents],
            )

        if skip_heuristics:
            return ProcessedResponse(clean_response=response)

        candidate = detect_file_content(response, user_message)
        if candidate is None:
            return ProcessedResponse(clean_response=response)

        counter("files.process.auto_detect")
        log_event(
            "files.process.auto_detect",
            word_count=candidate.word_count,
            file_type=candidate.file_type.value,
        )
        return ProcessedResponse(clean_response=response, files=[candidate])


def generate_file_explanation(file: FileCandidate) -> str:
    """Chat note shown next to a created document card."""
    lines = [
        (
            f"✅ **Documento creado**: He generado un {file.file_type.value.upper()} "
            f"con {file.word_count} palabras basado en tu solicitud."
        ),
        f"📄 **Archivo**: `{file.filename}`",
        f"📊 **Contenido**: {file.description}",
        "",
        (
            "Puedes **abrir el documento en el Canvas Editor** para editarlo, "
            "o **descargarlo** directamente. El editor te permitirá:"
        ),
        "",
        "- ✏️ Editar el contenido con formato rico",
        "- 📝 Añadir más secciones o modificar el texto",
        "- 💾 Guardar cambios automáticamente",
        "- 📤 Exportar en diferentes formatos (MD, TXT, PDF)",
        "",
        "¿Te gustaría que haga algún ajuste al contenido o necesitas ayuda con algo más?",
    ]
    return "\n".join(lines)
