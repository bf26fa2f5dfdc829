"""Encoder abstractions for Image to PDF."""

from .base import DocumentEncoder, EncoderLayer, EncoderPage, ImageTransform
from .pypdf_backend import PypdfEncoder

__all__ = [
    "DocumentEncoder",
    "EncoderLayer",
    "EncoderPage",
    "ImageTransform",
    "PypdfEncoder",
]
