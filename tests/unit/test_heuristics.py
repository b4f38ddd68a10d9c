"""
Unit tests for heuristic file detection

Tests cover:
- Explicit request phrases (Spanish and English)
- Hidden marker signatures
- Long text + "largo"/"long"
- Tool-response veto (absolute)
"""

from __future__ import annotations

import pytest

from cleo.files.heuristics import (
    DetectionReason,
    detect_file_content,
    evaluate,
    is_tool_response,
    user_requested_file,
)
from cleo.files.types import FileOrigin, FileType


class TestExplicitRequest:
    def test_spanish_essay_request(self, long_plain_text):
        """Plain 1500-word essay requested explicitly becomes an ensayo- file"""
        candidate = detect_file_content(
            long_plain_text, "Escribe un ensayo sobre el cambio climático"
        )

        assert candidate is not None
        assert candidate.origin == FileOrigin.AUTO_DETECT
        assert candidate.file_type == FileType.MD
        assert candidate.filename.startswith("ensayo-")
        assert candidate.filename.endswith(".md")
        assert candidate.word_count == 1540
        assert candidate.content == long_plain_text
        assert "Escribe un ensayo" in candidate.description

    def test_explicit_request_reason(self):
        decision = evaluate("Cuerpo breve", "Redacta un informe semanal")

        assert decision.should_create
        assert decision.reason is DetectionReason.EXPLICIT_REQUEST
        assert decision.reason.value == "explicit_request"

    def test_english_request_short_text(self):
        candidate = detect_file_content("A short report body.", "Please write a report on sales")

        assert candidate is not None
        assert candidate.filename.startswith("reporte-")

    def test_request_case_insensitive(self):
        assert user_requested_file("CREA UN DOCUMENTO con esto")

    def test_no_request(self):
        assert not user_requested_file("¿Qué hora es?")
        assert not user_requested_file(None)


class TestSignals:
    def test_hidden_signature(self):
        candidate = detect_file_content("[CREAR_ARCHIVO]\nContenido del archivo", None)
        assert candidate is not None
        assert evaluate("[CREAR_ARCHIVO] x").reason is DetectionReason.HIDDEN_SIGNATURE

    def test_long_text_with_largo(self, long_plain_text):
        decision = evaluate(long_plain_text, "Dame un texto largo sobre el clima")

        assert decision.should_create
        assert decision.reason is DetectionReason.LONG_REQUEST

    def test_long_text_with_long(self, long_plain_text):
        assert evaluate(long_plain_text, "give me a long answer").should_create

    def test_long_word_must_be_whole(self, long_plain_text):
        assert not evaluate(long_plain_text, "this belongs to the longitude table").should_create

    def test_short_text_with_largo(self):
        assert detect_file_content("uno dos tres", "algo largo") is None

    def test_long_text_without_keyword(self, long_plain_text):
        decision = evaluate(long_plain_text, "Háblame del clima")

        assert not decision.should_create
        assert decision.reason is DetectionReason.NO_SIGNAL
        assert decision.word_count == 1540
        assert decision.line_count == 21

    def test_plain_chat(self):
        assert detect_file_content("Hola, ¿en qué te ayudo?", "hola") is None


class TestToolResponseVeto:
    def test_drive_listing_vetoed(self, long_plain_text):
        """Veto wins over length, 'largo' and an explicit request"""
        text = "Encontré **5** archivos: ...| Hora | Evento |\n" + long_plain_text

        assert detect_file_content(text, "Escribe un ensayo largo") is None
        assert evaluate(text, "Escribe un ensayo largo").reason is DetectionReason.TOOL_RESPONSE

    def test_veto_beats_hidden_signature(self):
        assert detect_file_content("<!--FILE: I found 3 files:", None) is None

    @pytest.mark.parametrize(
        "header",
        ["| Hora |", "| Evento |", "|Duración|", "| Ubicación |", "| Asistentes |",
         "| Recordatorios |", "|  Estado  |"],
    )
    def test_calendar_table_headers(self, header, long_plain_text):
        text = f"{long_plain_text}\n\n{header} x |\n|---|---|"
        assert is_tool_response(text)
        assert detect_file_content(text, "Escribe un ensayo") is None

    @pytest.mark.parametrize(
        "text",
        [
            "Encontré 3 documentos",
            "I found your notes",
            "Carpetas y archivos: a, b",
            "Here are your files: a, b",
            "Tienes **3** reuniones",
            "¿Qué te gustaría hacer?",
            "Uso total: 40 MB",
            "📁 Proyectos",
            "👥 Equipo",
            "📅 **Lunes**",
            "🌟 **Hoy** tienes libre",
            "Hay **12** Events hoy",
            "Quedan **2** carpetas",
        ],
    )
    def test_signatures(self, text):
        assert is_tool_response(text)

    @pytest.mark.parametrize(
        "text",
        [
            "Un ensayo sobre el mar.",
            "Total de capítulos: 3",
            "El archivo quedó listo",
            "| Nombre | Edad |",
        ],
    )
    def test_ordinary_text_not_vetoed(self, text):
        assert not is_tool_response(text)
