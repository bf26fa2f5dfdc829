"""Document assembly: one page per image, sized from the image and DPI."""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Callable, Iterator, Optional, Tuple, Union

from .backends.base import DocumentEncoder, ImageTransform
from .backends.pypdf_backend import PypdfEncoder
from .geometry import page_geometry
from .progress import NullProgressObserver, ProgressObserver
from .types import DocumentPage

if TYPE_CHECKING:
    from .builder import ImageToPdfBuilder

LOGGER = logging.getLogger("image_to_pdf.assembler")

EncoderFactory = Callable[[str], DocumentEncoder]


class Document:
    """An assembled document, ready to be serialized.

    Attributes:
        title: Document title written to the PDF metadata
        dpi: Resolution used to size the pages
        pages: Placed pages in document order
        encoder: Encoder holding the page content
    """

    def __init__(
        self,
        title: str,
        dpi: float,
        pages: Tuple[DocumentPage, ...],
        encoder: DocumentEncoder,
    ) -> None:
        self.title = title
        self.dpi = dpi
        self.pages = pages
        self.encoder = encoder

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[DocumentPage]:
        return iter(self.pages)

    def __repr__(self) -> str:
        return f"Document(title={self.title!r}, pages={len(self.pages)}, dpi={self.dpi})"

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def save(self, stream: BinaryIO) -> None:
        """Write the PDF to a binary stream. Encoder and I/O errors propagate unchanged."""
        self.encoder.save(stream)

    def save_to(self, path: Union[str, os.PathLike]) -> Path:
        destination = Path(path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        with destination.open("wb") as handle:
            self.save(handle)
        LOGGER.debug("Wrote %d pages to %s", len(self.pages), destination)
        return destination

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.save(buffer)
        return buffer.getvalue()


def assemble(
    builder: "ImageToPdfBuilder",
    observer: Optional[ProgressObserver] = None,
    *,
    encoder: Optional[EncoderFactory] = None,
) -> Document:
    """Consume *builder* and lay out one page per image, in builder order.

    Each page is sized with :func:`~image_to_pdf.geometry.page_geometry` and
    holds its image at the origin. *observer* receives one ``on_item_done``
    per page and never influences the result. Any error aborts assembly; no
    partial document is returned.
    """

    images, config = builder._release()
    if observer is None:
        observer = NullProgressObserver()
    target = (encoder or PypdfEncoder)(config.title)
    transform = ImageTransform(dpi=config.dpi)

    total = len(images)
    LOGGER.debug("Assembling %d pages at %s DPI", total, config.dpi)

    pages = []
    observer.on_batch_start(total)
    try:
        for number, image in enumerate(images, start=1):
            geometry = page_geometry(image.width, image.height, config.dpi)
            page_id, layer_id = target.add_page(
                geometry.width_pt, geometry.height_pt, f"Page {number}"
            )
            target.get_page(page_id).get_layer(layer_id).add_image(image, transform)
            pages.append(
                DocumentPage(
                    number=number,
                    geometry=geometry,
                    image=image,
                    page_id=page_id,
                    layer_id=layer_id,
                )
            )
            observer.on_item_done()
    finally:
        observer.on_batch_done()

    return Document(title=config.title, dpi=config.dpi, pages=tuple(pages), encoder=target)


__all__ = ["Document", "EncoderFactory", "assemble"]
