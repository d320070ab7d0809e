"""Editor package containing the document buffer and edit application."""

from . import document_model, patches

__all__ = ["document_model", "patches"]
