"""Results writing exports."""

from .html_writer import render_document_html, render_documents_html, render_field_html
from .workbook_writer import EXPORT_SHEET_NAME, cell_text, write_submissions_workbook

__all__ = [
    "EXPORT_SHEET_NAME",
    "cell_text",
    "render_document_html",
    "render_documents_html",
    "render_field_html",
    "write_submissions_workbook",
]
