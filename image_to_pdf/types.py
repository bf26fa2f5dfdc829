"""
Type definitions and dataclasses for Image to PDF.

This module defines data structures used throughout the library.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class PageGeometry:
    """
    Physical size of a page, in PDF points (1/72 inch).

    Attributes:
        width_pt: Page width in points
        height_pt: Page height in points
    """
    width_pt: float
    height_pt: float

    def as_tuple(self) -> tuple:
        return (self.width_pt, self.height_pt)


@dataclass(frozen=True)
class DocumentPage:
    """
    A page placed by the assembler.

    Attributes:
        number: 1-based page number in the document
        geometry: Page size derived from the image and DPI
        image: The image embedded on this page
        page_id: Encoder handle of the page
        layer_id: Encoder handle of the layer holding the image
    """
    number: int
    geometry: PageGeometry
    image: Any
    page_id: int
    layer_id: int


@dataclass(frozen=True)
class ImageInfo:
    """
    Basic information about a decoded image.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        mode: Pillow pixel mode (e.g. ``RGB``)
        format: Source format reported by the codec, if known
    """
    width: int
    height: int
    mode: str
    format: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.width}x{self.height} {self.mode}"
