"""Generic renderer for formats without a specialized layout.

Used for OpenDocument, RTF, and any unrecognized document type.
"""

from .base import BaseRenderer


class GenericRenderer(BaseRenderer):
    """Best-effort flat text: leaf text joined by the generic rule."""

    def render_text(self) -> str:
        return self.join_top_level(self.generic_text)
