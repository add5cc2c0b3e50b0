"""PDF export of tailored resumes."""

from autoapply.export.pdf import (
    PDFExporter,
    PDFExportError,
    RenderResult,
    sanitize_pdf_text,
)

__all__ = ["PDFExporter", "PDFExportError", "RenderResult", "sanitize_pdf_text"]
