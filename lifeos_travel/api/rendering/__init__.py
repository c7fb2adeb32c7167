"""Views over grouped stops: editor, public share page and PDF export."""

from .editor import EditorState, build_editor_view
from .public import build_public_view, load_public_itinerary
from .pdf import export_itinerary_pdf, layout_itinerary_pdf, pdf_content_order

__all__ = [
    'EditorState', 'build_editor_view',
    'build_public_view', 'load_public_itinerary',
    'export_itinerary_pdf', 'layout_itinerary_pdf', 'pdf_content_order',
]
