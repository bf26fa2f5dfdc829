"""Image decoding built on Pillow."""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from .exceptions import DecodeError, RetrievalError
from .types import ImageInfo

LOGGER = logging.getLogger("image_to_pdf.codec")


def decode_image(data: bytes) -> Image.Image:
    """Decode *data* into a fully loaded :class:`PIL.Image.Image`.

    Only the first frame of animated or multi-frame images is kept.
    """

    if not data:
        raise DecodeError("Cannot decode image: no data")

    try:
        with Image.open(io.BytesIO(data)) as opened:
            source_format = opened.format
            opened.seek(0)
            image = opened.copy()
    except UnidentifiedImageError as exc:
        raise DecodeError(f"Cannot decode image: unrecognised format. Error: {exc}") from exc
    except Image.DecompressionBombError as exc:
        raise DecodeError(f"Cannot decode image: {exc}") from exc
    except (OSError, ValueError, SyntaxError) as exc:
        raise DecodeError(f"Cannot decode image: corrupted or truncated data. Error: {exc}") from exc

    if image.width < 1 or image.height < 1:
        raise DecodeError(f"Cannot decode image: empty image ({image.width}x{image.height})")

    image.format = source_format
    LOGGER.debug("Decoded %s image %dx%d (%s)", source_format, image.width, image.height, image.mode)
    return image


def open_image(path: Union[str, os.PathLike]) -> Image.Image:
    """Read and decode the image file at *path*."""

    file_path = Path(path)
    if not file_path.is_file():
        raise RetrievalError(f"Image file not found: {path}")
    try:
        data = file_path.read_bytes()
    except OSError as exc:
        raise RetrievalError(f"Unable to read image file: {path}. Error: {exc}") from exc
    return decode_image(data)


def image_info(image: Image.Image) -> ImageInfo:
    return ImageInfo(
        width=image.width,
        height=image.height,
        mode=image.mode,
        format=getattr(image, "format", None),
    )


__all__ = ["decode_image", "image_info", "open_image"]
