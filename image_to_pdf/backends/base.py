"""Encoder protocol for PDF document construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Protocol, Tuple

from PIL import Image

from ..geometry import DEFAULT_DPI


@dataclass(frozen=True)
class ImageTransform:
    """Placement of an image on a layer.

    The drawn size is the image's pixel size converted at ``dpi`` and then
    multiplied by the scale factors. The default places the image at the
    page origin with no scaling.
    """

    translate_x: float = 0.0
    translate_y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    dpi: float = DEFAULT_DPI


class EncoderLayer(Protocol):
    """A drawing surface on a page."""

    name: str

    def add_image(self, image: Image.Image, transform: ImageTransform) -> None:
        """Embed *image* on this layer using *transform*."""


class EncoderPage(Protocol):
    """A page allocated by an encoder."""

    width_pt: float
    height_pt: float

    def get_layer(self, layer_id: int) -> EncoderLayer:
        """Return the layer registered under *layer_id*."""


class DocumentEncoder(Protocol):
    """Protocol defining the operations the assembler drives."""

    title: str

    @property
    def page_count(self) -> int:
        """Number of pages allocated so far."""

    def add_page(self, width_pt: float, height_pt: float, label: str) -> Tuple[int, int]:
        """Allocate a page and its first layer, returning ``(page_id, layer_id)``."""

    def get_page(self, page_id: int) -> EncoderPage:
        """Return the page registered under *page_id*."""

    def save(self, stream: BinaryIO) -> None:
        """Serialize the document to a binary stream."""
