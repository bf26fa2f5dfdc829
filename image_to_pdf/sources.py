"""Retrieval of raw image bytes from file paths and URLs."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import requests
from PIL import Image

from .codec import decode_image
from .exceptions import RetrievalError

LOGGER = logging.getLogger("image_to_pdf.sources")

DEFAULT_TIMEOUT = 30.0

Source = Union[str, os.PathLike]


def is_url(source: Source) -> bool:
    if not isinstance(source, str):
        return False
    return urlparse(source).scheme.lower() in ("http", "https")


def fetch_bytes(
    source: Source,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> bytes:
    """Return the raw bytes behind *source*, a local path or an http(s) URL."""

    if is_url(source):
        client = session or requests
        LOGGER.debug("Downloading %s", source)
        try:
            response = client.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise RetrievalError(f"Failed to download image: {source}. Error: {exc}") from exc
        return response.content

    path = Path(source).expanduser()
    if not path.exists() or not path.is_file():
        raise RetrievalError(f"Image file not found: {source}")
    try:
        return path.read_bytes()
    except OSError as exc:
        raise RetrievalError(f"Unable to read image file: {source}. Error: {exc}") from exc


def load_image(
    source: Source,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> Image.Image:
    """Fetch and decode the image at *source*."""

    return decode_image(fetch_bytes(source, timeout=timeout, session=session))


__all__ = ["DEFAULT_TIMEOUT", "Source", "fetch_bytes", "is_url", "load_image"]
