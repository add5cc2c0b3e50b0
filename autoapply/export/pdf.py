"""PDF export using WeasyPrint.

Renders plain resume text onto a single page through a Jinja2 HTML
template. Text that does not fit on the first page is clipped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from weasyprint import HTML

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_FILENAME = "tailored-resume.pdf"

PAGE_SIZE = "A4"
MARGIN_PT = 40
FONT_SIZE_PT = 12
LINE_HEIGHT_PT = FONT_SIZE_PT + 2

_UNSUPPORTED_CHARS = re.compile(r"[^\u0000-\u00ff]")


def sanitize_pdf_text(text: str) -> str:
    """Make text safe for the Latin-1 Times face.

    Bullets become ``"- "``; every other character above U+00FF is dropped.
    """
    return _UNSUPPORTED_CHARS.sub("", text.replace("\u2022", "- "))


class PDFExportError(Exception):
    """Raised when a PDF cannot be produced."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


@dataclass
class RenderResult:
    """Result of a PDF export to disk."""

    success: bool
    file_path: str | None = None
    error: str | None = None
    rendered_at: datetime = field(default_factory=datetime.now)


class PDFExporter:
    """Single-page PDF exporter for tailored resume text."""

    def __init__(
        self,
        output_dir: Path | str | None = None,
        template_dir: Path | None = None,
    ):
        """Initialize the exporter.

        Args:
            output_dir: Directory used by ``export_to_file`` for relative paths.
            template_dir: Override for the bundled templates.
        """
        self.output_dir = Path(output_dir) if output_dir else Path("./artifacts")
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
            autoescape=True,
        )

    def _render_html(self, text: str) -> str:
        styles = self.jinja_env.get_template("styles.css").render(
            page_size=PAGE_SIZE,
            margin=MARGIN_PT,
            font_size=FONT_SIZE_PT,
            line_height=LINE_HEIGHT_PT,
        )
        template = self.jinja_env.get_template("resume.html")
        return template.render(
            title="Tailored Resume",
            text=sanitize_pdf_text(text),
            styles=styles,
        )

    def render(self, text: str) -> bytes:
        """Render ``text`` to PDF bytes.

        Raises:
            PDFExportError: If templating or rendering fails.
        """
        try:
            html_content = self._render_html(text)
            document = HTML(string=html_content, base_url=str(TEMPLATE_DIR)).render()
            if len(document.pages) > 1:
                logger.warning(
                    f"Resume text spans {len(document.pages)} pages, keeping the first"
                )
                document = document.copy(document.pages[:1])
            pdf_bytes = document.write_pdf()
        except Exception as e:
            logger.error(f"PDF generation failed: {e}")
            raise PDFExportError(f"PDF generation failed: {e}", e) from e

        if not pdf_bytes:
            raise PDFExportError("PDF generation failed: renderer returned no data")
        return pdf_bytes

    def export_to_file(
        self,
        text: str,
        path: Path | str | None = None,
    ) -> RenderResult:
        """Render ``text`` and write it to disk.

        Args:
            text: Resume text.
            path: Target file. Relative paths and the default filename
                resolve under ``output_dir``.

        Returns:
            RenderResult with file path or error.
        """
        target = Path(path) if path else Path(DEFAULT_FILENAME)
        if not target.is_absolute():
            target = self.output_dir / target

        try:
            pdf_bytes = self.render(text)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(pdf_bytes)
        except (PDFExportError, OSError) as e:
            logger.error(f"Failed to export PDF to {target}: {e}")
            return RenderResult(success=False, error=str(e))

        logger.info(f"Rendered resume to {target}")
        return RenderResult(success=True, file_path=str(target))
