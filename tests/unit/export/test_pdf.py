"""Unit tests for the PDF exporter.

WeasyPrint is mocked; these tests cover sanitizing, templating, page
clipping, and file output.
"""

from unittest.mock import MagicMock, patch

import pytest

from autoapply.export.pdf import (
    FONT_SIZE_PT,
    LINE_HEIGHT_PT,
    MARGIN_PT,
    PDFExporter,
    PDFExportError,
    RenderResult,
    sanitize_pdf_text,
)


def _mock_document(pages: int = 1, data: bytes = b"%PDF-1.7 test"):
    document = MagicMock()
    document.pages = [MagicMock() for _ in range(pages)]
    document.write_pdf.return_value = data
    clipped = MagicMock()
    clipped.pages = document.pages[:1]
    clipped.write_pdf.return_value = data
    document.copy.return_value = clipped
    return document, clipped


class TestSanitizePdfText:
    """Test text sanitizing for the Latin-1 font."""

    def test_bullet_becomes_dash(self):
        assert sanitize_pdf_text("• Python") == "-  Python"

    def test_strips_characters_above_latin1(self):
        assert sanitize_pdf_text("Café — \U0001f680 done") == "Café   done"

    def test_keeps_newlines_and_latin1(self):
        assert sanitize_pdf_text("a\nb\tÿ") == "a\nb\tÿ"


class TestRenderHtml:
    """Test template rendering."""

    def test_layout_constants(self):
        assert MARGIN_PT == 40
        assert FONT_SIZE_PT == 12
        assert LINE_HEIGHT_PT == 14

    def test_html_contains_escaped_sanitized_text_and_styles(self, tmp_path):
        html = PDFExporter(output_dir=tmp_path)._render_html("• C++ & <Rust>")

        assert "-  C++ &amp; &lt;Rust&gt;" in html
        assert "margin: 40pt" in html
        assert "font-size: 12pt" in html
        assert "line-height: 14pt" in html
        assert "white-space: pre-wrap" in html


class TestRender:
    """Test PDF rendering."""

    def test_single_page_is_written_directly(self, tmp_path):
        document, _ = _mock_document(pages=1)

        with patch("autoapply.export.pdf.HTML") as html_cls:
            html_cls.return_value.render.return_value = document
            data = PDFExporter(output_dir=tmp_path).render("Resume")

        assert data == b"%PDF-1.7 test"
        document.copy.assert_not_called()
        assert "Resume" in html_cls.call_args.kwargs["string"]

    def test_overflow_keeps_only_first_page(self, tmp_path):
        document, clipped = _mock_document(pages=3)

        with patch("autoapply.export.pdf.HTML") as html_cls:
            html_cls.return_value.render.return_value = document
            PDFExporter(output_dir=tmp_path).render("Long resume")

        assert len(document.copy.call_args.args[0]) == 1
        clipped.write_pdf.assert_called_once()
        document.write_pdf.assert_not_called()

    def test_renderer_failure_raises_export_error(self, tmp_path):
        with patch("autoapply.export.pdf.HTML", side_effect=RuntimeError("no fonts")):
            with pytest.raises(PDFExportError, match="PDF generation failed") as exc_info:
                PDFExporter(output_dir=tmp_path).render("Resume")

        assert isinstance(exc_info.value.original_error, RuntimeError)

    def test_empty_output_raises_export_error(self, tmp_path):
        document, _ = _mock_document(data=b"")

        with patch("autoapply.export.pdf.HTML") as html_cls:
            html_cls.return_value.render.return_value = document
            with pytest.raises(PDFExportError):
                PDFExporter(output_dir=tmp_path).render("Resume")


class TestExportToFile:
    """Test writing PDFs to disk."""

    def test_default_path_under_output_dir(self, tmp_path):
        exporter = PDFExporter(output_dir=tmp_path / "out")

        with patch.object(exporter, "render", return_value=b"%PDF"):
            result = exporter.export_to_file("Resume")

        assert isinstance(result, RenderResult)
        assert result.success
        assert result.file_path == str(tmp_path / "out" / "tailored-resume.pdf")
        assert (tmp_path / "out" / "tailored-resume.pdf").read_bytes() == b"%PDF"

    def test_absolute_path_is_used_as_is(self, tmp_path):
        exporter = PDFExporter(output_dir=tmp_path / "unused")
        target = tmp_path / "custom" / "cv.pdf"

        with patch.object(exporter, "render", return_value=b"%PDF"):
            result = exporter.export_to_file("Resume", target)

        assert result.file_path == str(target)
        assert target.exists()

    def test_failure_is_reported_not_raised(self, tmp_path):
        exporter = PDFExporter(output_dir=tmp_path)

        with patch.object(exporter, "render", side_effect=PDFExportError("boom")):
            result = exporter.export_to_file("Resume")

        assert not result.success
        assert result.file_path is None
        assert result.error == "boom"
