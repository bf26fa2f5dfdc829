"""
Custom exceptions for Image to PDF.

This module defines all custom exceptions used throughout the library.
"""

from typing import Optional


class ImageToPdfException(Exception):
    """Base exception for all Image to PDF errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown image to PDF error occurred."


class ConfigurationError(ImageToPdfException):
    """Raised when document configuration or page geometry input is unusable."""

    @property
    def default_message(self) -> str:
        return "Invalid document configuration."


class InvalidDPIError(ConfigurationError):
    """Raised when the DPI is not a finite number greater than zero."""

    @property
    def default_message(self) -> str:
        return "DPI must be a finite number greater than zero."


class PixelDimensionError(ConfigurationError):
    """Raised when an image dimension cannot be represented as a PDF integer."""

    @property
    def default_message(self) -> str:
        return "Image pixel dimension is out of the supported range."


class DecodeError(ImageToPdfException):
    """Raised when raw bytes cannot be decoded into an image."""

    @property
    def default_message(self) -> str:
        return "Cannot decode image data."


class RetrievalError(ImageToPdfException):
    """Raised when an image source cannot be read or downloaded."""

    @property
    def default_message(self) -> str:
        return "Unable to retrieve image source."


class ParallelIngestionError(ImageToPdfException):
    """Raised when any unit of parallel image production fails.

    ``index`` is the position of the first failing producer and ``failures``
    the number of producers that raised.
    """

    def __init__(self, message: str = "", *, index: Optional[int] = None, failures: int = 0) -> None:
        super().__init__(message)
        self.index = index
        self.failures = failures

    @property
    def default_message(self) -> str:
        return "Parallel image ingestion failed; no images were added."


class BuilderConsumedError(ImageToPdfException):
    """Raised when a builder is used after it has been assembled."""

    @property
    def default_message(self) -> str:
        return "This builder has already been assembled and cannot be reused."


class EncoderError(ImageToPdfException):
    """Raised when the document encoder is driven with invalid handles."""

    @property
    def default_message(self) -> str:
        return "Invalid document encoder operation."
