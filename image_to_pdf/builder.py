"""Chainable accumulator of images and document settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, BinaryIO, Iterable, List, Optional, Tuple

from PIL import Image

from .assembler import Document, assemble
from .config import DocumentConfig
from .exceptions import BuilderConsumedError
from .geometry import DEFAULT_DPI
from .parallel import Producer, collect_ordered, producers_from
from .sources import Source, load_image

if TYPE_CHECKING:
    from .progress import ProgressObserver

LOGGER = logging.getLogger("image_to_pdf.builder")


class ImageToPdfBuilder:
    """Collect images in page order, then assemble them into a PDF.

    Every mutator returns the builder so calls can be chained::

        document = (
            ImageToPdfBuilder()
            .add_image(cover)
            .add_images(pages)
            .set_dpi(150)
            .set_title("Scans")
            .create()
        )

    The builder owns the images it is given and is single-use: once
    :meth:`create` (or :func:`~image_to_pdf.assembler.assemble`) has run,
    every further call raises :class:`BuilderConsumedError`.
    """

    def __init__(
        self,
        images: Optional[Iterable[Image.Image]] = None,
        dpi: float = DEFAULT_DPI,
        title: str = "",
    ) -> None:
        self._config = DocumentConfig(dpi=dpi, title=title)
        self._images: List[Image.Image] = list(images) if images is not None else []
        self._consumed = False

    def __len__(self) -> int:
        return len(self._images)

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else f"{len(self._images)} images"
        return f"ImageToPdfBuilder({state}, dpi={self._config.dpi}, title={self._config.title!r})"

    @property
    def images(self) -> Tuple[Image.Image, ...]:
        return tuple(self._images)

    @property
    def config(self) -> DocumentConfig:
        return self._config

    @property
    def dpi(self) -> float:
        return self._config.dpi

    @property
    def title(self) -> str:
        return self._config.title

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _ensure_open(self) -> None:
        if self._consumed:
            raise BuilderConsumedError()

    def add_image(self, image: Image.Image) -> "ImageToPdfBuilder":
        """Append one image to the end of the document."""
        self._ensure_open()
        self._images.append(image)
        return self

    def add_images(self, images: Iterable[Image.Image]) -> "ImageToPdfBuilder":
        """Append *images* in the order given."""
        self._ensure_open()
        # A failing iterator must leave the builder untouched.
        items = list(images)
        self._images.extend(items)
        return self

    def add_images_parallel(
        self,
        producer: Iterable[Producer[Image.Image]],
        *,
        max_workers: Optional[int] = None,
    ) -> "ImageToPdfBuilder":
        """Run every callable in *producer* on a thread pool and append the results.

        Results are appended in producer order, not completion order. The
        call is atomic: if any producer raises, nothing is appended and
        :class:`~image_to_pdf.exceptions.ParallelIngestionError` propagates.
        """
        self._ensure_open()
        images = collect_ordered(producer, max_workers=max_workers)
        self._images.extend(images)
        LOGGER.debug("Added %d images from parallel producer", len(images))
        return self

    def set_dpi(self, dpi: float) -> "ImageToPdfBuilder":
        self._ensure_open()
        self._config = self._config.with_dpi(dpi)
        return self

    def set_title(self, title: str) -> "ImageToPdfBuilder":
        self._ensure_open()
        self._config = self._config.with_title(title)
        return self

    set_document_title = set_title

    def set_config(self, config: DocumentConfig) -> "ImageToPdfBuilder":
        self._ensure_open()
        self._config = config
        return self

    def _release(self) -> Tuple[List[Image.Image], DocumentConfig]:
        """Hand the images and config to the assembler and retire the builder."""
        self._ensure_open()
        self._consumed = True
        images, self._images = self._images, []
        return images, self._config

    def create(self, observer: Optional["ProgressObserver"] = None) -> Document:
        """Assemble the document. The builder cannot be used afterwards."""
        return assemble(self, observer)

    def create_pdf(
        self,
        stream: BinaryIO,
        observer: Optional["ProgressObserver"] = None,
    ) -> Document:
        """Assemble the document and write it to *stream*."""
        document = self.create(observer)
        document.save(stream)
        return document

    @classmethod
    def from_sources(
        cls,
        sources: Iterable[Source],
        *,
        parallel: bool = False,
        max_workers: Optional[int] = None,
        dpi: float = DEFAULT_DPI,
        title: str = "",
    ) -> "ImageToPdfBuilder":
        """Create a builder from file paths or URLs, keeping their order."""
        builder = cls(dpi=dpi, title=title)
        if parallel:
            return builder.add_images_parallel(
                producers_from(load_image, sources), max_workers=max_workers
            )
        return builder.add_images(load_image(source) for source in sources)


__all__ = ["ImageToPdfBuilder"]
