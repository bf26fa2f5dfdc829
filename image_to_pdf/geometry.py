"""Page geometry: pixel dimensions and DPI to page size in points."""

from __future__ import annotations

import math
from numbers import Real

from .exceptions import InvalidDPIError, PixelDimensionError
from .types import PageGeometry

POINTS_PER_INCH = 72.0
DEFAULT_DPI = 300.0

# Largest integer a PDF consumer is required to handle.
MAX_PIXEL_DIMENSION = 2**31 - 1


def validate_dpi(dpi: object) -> float:
    """Return *dpi* as a float or raise :class:`InvalidDPIError`."""

    if isinstance(dpi, bool) or not isinstance(dpi, Real):
        raise InvalidDPIError(f"DPI must be a number, got {dpi!r}")
    value = float(dpi)
    if math.isnan(value) or math.isinf(value):
        raise InvalidDPIError(f"DPI must be finite, got {dpi!r}")
    if value <= 0:
        raise InvalidDPIError(f"DPI must be greater than zero, got {dpi!r}")
    return value


def validate_pixel_dimension(value: object, axis: str = "width") -> int:
    """Return *value* if it is a usable pixel count for *axis*."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise PixelDimensionError(f"Image {axis} must be an integer, got {value!r}")
    if value < 1:
        raise PixelDimensionError(f"Image {axis} must be at least 1 pixel, got {value}")
    if value > MAX_PIXEL_DIMENSION:
        raise PixelDimensionError(
            f"Image {axis} of {value} pixels exceeds the maximum of {MAX_PIXEL_DIMENSION}"
        )
    return value


def pixels_to_points(pixels: int, dpi: float) -> float:
    return pixels * POINTS_PER_INCH / dpi


def page_geometry(width_px: int, height_px: int, dpi: float) -> PageGeometry:
    """Compute the page size that fits an image of ``width_px`` x ``height_px`` at *dpi*.

    >>> page_geometry(600, 800, 300.0)
    PageGeometry(width_pt=144.0, height_pt=192.0)
    """

    width = validate_pixel_dimension(width_px, "width")
    height = validate_pixel_dimension(height_px, "height")
    resolution = validate_dpi(dpi)
    return PageGeometry(
        width_pt=pixels_to_points(width, resolution),
        height_pt=pixels_to_points(height, resolution),
    )


__all__ = [
    "DEFAULT_DPI",
    "MAX_PIXEL_DIMENSION",
    "POINTS_PER_INCH",
    "page_geometry",
    "pixels_to_points",
    "validate_dpi",
    "validate_pixel_dimension",
]
