"""pypdf encoder implementation for Image to PDF."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, List, Optional, Tuple

from PIL import Image
from pypdf import PageObject, PdfWriter
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    NameObject,
    NumberObject,
)

from ..exceptions import EncoderError
from ..geometry import pixels_to_points
from .base import DocumentEncoder, ImageTransform

LOGGER = logging.getLogger("image_to_pdf.encoder")

PRODUCER = "image-to-pdf"

_COLOR_SPACES = {
    "L": "/DeviceGray",
    "RGB": "/DeviceRGB",
    "CMYK": "/DeviceCMYK",
}


def _fmt(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return text if text not in ("", "-0") else "0"


def _split_alpha(image: Image.Image) -> Tuple[Image.Image, Optional[Image.Image]]:
    """Return the colour plane to embed and an optional alpha plane."""

    mode = image.mode
    if mode == "LA":
        return image.convert("L"), image.getchannel("A")
    if mode in ("RGBA", "PA") or (mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        return rgba.convert("RGB"), rgba.getchannel("A")
    if mode in _COLOR_SPACES:
        return image, None
    if mode == "1":
        return image.convert("L"), None
    if mode.startswith("I;16"):
        image = image.convert("I")
        mode = "I"
    if mode == "I":
        # 16-bit samples scaled down to 8 bits; convert() alone would clip them.
        return image.point(lambda value: value * (1 / 256)).convert("L"), None
    if mode == "F":
        return image.convert("L"), None
    return image.convert("RGB"), None


def _image_stream(image: Image.Image) -> DecodedStreamObject:
    stream = DecodedStreamObject()
    stream.set_data(image.tobytes())
    stream.update(
        {
            NameObject("/Type"): NameObject("/XObject"),
            NameObject("/Subtype"): NameObject("/Image"),
            NameObject("/Width"): NumberObject(image.width),
            NameObject("/Height"): NumberObject(image.height),
            NameObject("/ColorSpace"): NameObject(_COLOR_SPACES[image.mode]),
            NameObject("/BitsPerComponent"): NumberObject(8),
        }
    )
    return stream


@dataclass
class PypdfLayer:
    """A content stream on a page. Each embedded image gets its own XObject name."""

    writer: PdfWriter
    page: PageObject
    content: DecodedStreamObject
    name: str = ""

    def add_image(self, image: Image.Image, transform: ImageTransform) -> None:
        colour, alpha = _split_alpha(image)
        xobject = _image_stream(colour)
        if alpha is not None:
            smask = _image_stream(alpha).flate_encode()
            xobject[NameObject("/SMask")] = self.writer._add_object(smask)  # type: ignore[attr-defined]
        image_ref = self.writer._add_object(xobject.flate_encode())  # type: ignore[attr-defined]

        resources = self.page[NameObject("/Resources")]
        xobjects = resources[NameObject("/XObject")]
        image_name = f"/Im{len(xobjects)}"
        xobjects[NameObject(image_name)] = image_ref

        width = pixels_to_points(image.width, transform.dpi) * transform.scale_x
        height = pixels_to_points(image.height, transform.dpi) * transform.scale_y
        operators = (
            f"q {_fmt(width)} 0 0 {_fmt(height)} "
            f"{_fmt(transform.translate_x)} {_fmt(transform.translate_y)} cm "
            f"{image_name} Do Q\n"
        ).encode("ascii")
        self.content.set_data(self.content.get_data() + operators)
        LOGGER.debug(
            "Embedded %sx%s %s image as %s (%.2f x %.2f pt)",
            image.width,
            image.height,
            image.mode,
            image_name,
            width,
            height,
        )


@dataclass
class PypdfPage:
    writer: PdfWriter
    page: PageObject
    width_pt: float
    height_pt: float
    label: str = ""
    layers: List[PypdfLayer] = field(default_factory=list)

    def add_layer(self, name: str) -> int:
        content = DecodedStreamObject()
        content_ref = self.writer._add_object(content)  # type: ignore[attr-defined]
        contents = self.page.get(NameObject("/Contents"))
        if contents is None:
            contents = ArrayObject()
            self.page[NameObject("/Contents")] = contents
        contents.append(content_ref)
        self.layers.append(PypdfLayer(self.writer, self.page, content, name=name))
        return len(self.layers) - 1

    def get_layer(self, layer_id: int) -> PypdfLayer:
        if not 0 <= layer_id < len(self.layers):
            raise EncoderError(f"Unknown layer id {layer_id} on page '{self.label}'")
        return self.layers[layer_id]


class PypdfEncoder(DocumentEncoder):
    """Encoder that builds the document with :class:`pypdf.PdfWriter`."""

    def __init__(self, title: str = "") -> None:
        self.title = title
        self._writer = PdfWriter()
        self._pages: Dict[int, PypdfPage] = {}

    @property
    def writer(self) -> PdfWriter:
        return self._writer

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def add_page(self, width_pt: float, height_pt: float, label: str) -> Tuple[int, int]:
        self._writer.add_blank_page(width=width_pt, height=height_pt)
        page_object = self._writer.pages[-1]
        page_object[NameObject("/Resources")] = DictionaryObject(
            {NameObject("/XObject"): DictionaryObject()}
        )

        page_id = len(self._pages)
        page = PypdfPage(self._writer, page_object, width_pt, height_pt, label=label)
        layer_id = page.add_layer(label or "Layer 1")
        self._pages[page_id] = page
        LOGGER.debug("Added page %d (%.2f x %.2f pt)", page_id + 1, width_pt, height_pt)
        return page_id, layer_id

    def get_page(self, page_id: int) -> PypdfPage:
        try:
            return self._pages[page_id]
        except KeyError as exc:
            raise EncoderError(f"Unknown page id {page_id}") from exc

    def save(self, stream: BinaryIO) -> None:
        self._writer.add_metadata({"/Title": self.title, "/Producer": PRODUCER})
        self._writer.write(stream)
