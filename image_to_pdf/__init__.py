"""
Image to PDF - Combine raster images into a PDF, one page per image.

Each page is sized to its image: pixel dimensions are converted to points
at a configurable resolution (``points = pixels * 72 / dpi``).

Quick Start:
    >>> from image_to_pdf import ImageToPdfBuilder, load_image
    >>> document = (
    ...     ImageToPdfBuilder()
    ...     .add_image(load_image('page1.png'))
    ...     .add_image(load_image('page2.png'))
    ...     .set_dpi(150)
    ...     .set_title('Scans')
    ...     .create()
    ... )
    >>> document.save_to('scans.pdf')

Main Classes:
    - ImageToPdfBuilder: Chainable accumulator of images and settings
    - Document: Assembled document, ready to be saved
    - DocumentConfig: DPI and title settings

Progress:
    - RichProgressObserver: Drive a rich progress bar during assembly
    - ChainedProgress: rich Progress whose bars can be chained in order
    - CallbackProgressObserver: Report ``(current, total)`` to a callback

Exceptions:
    - ImageToPdfException: Base exception
    - ConfigurationError: Invalid DPI or pixel dimensions
    - DecodeError: Image data cannot be decoded
    - RetrievalError: Image source cannot be read or downloaded
    - ParallelIngestionError: A parallel producer failed
    - BuilderConsumedError: Builder reused after assembly

For CLI usage, use the 'image-to-pdf' command after installation.
"""

# Core classes
from image_to_pdf.assembler import Document, assemble
from image_to_pdf.builder import ImageToPdfBuilder
from image_to_pdf.config import DocumentConfig

# Geometry
from image_to_pdf.geometry import DEFAULT_DPI, page_geometry

# Data types
from image_to_pdf.types import DocumentPage, ImageInfo, PageGeometry

# Progress observers
from image_to_pdf.progress import (
    CallbackProgressObserver,
    ChainedProgress,
    NullProgressObserver,
    ProgressObserver,
    RichProgressObserver,
)

# Collaborators
from image_to_pdf.codec import decode_image, open_image
from image_to_pdf.parallel import collect_ordered, producers_from
from image_to_pdf.sources import fetch_bytes, load_image

# Exceptions
from image_to_pdf.exceptions import (
    ImageToPdfException,
    ConfigurationError,
    InvalidDPIError,
    PixelDimensionError,
    DecodeError,
    RetrievalError,
    ParallelIngestionError,
    BuilderConsumedError,
    EncoderError,
)

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Main classes
    "ImageToPdfBuilder",
    "Document",
    "DocumentConfig",
    "assemble",
    # Geometry
    "DEFAULT_DPI",
    "page_geometry",
    # Data types
    "DocumentPage",
    "ImageInfo",
    "PageGeometry",
    # Progress observers
    "CallbackProgressObserver",
    "ChainedProgress",
    "NullProgressObserver",
    "ProgressObserver",
    "RichProgressObserver",
    # Collaborators
    "decode_image",
    "open_image",
    "collect_ordered",
    "producers_from",
    "fetch_bytes",
    "load_image",
    # Exceptions
    "ImageToPdfException",
    "ConfigurationError",
    "InvalidDPIError",
    "PixelDimensionError",
    "DecodeError",
    "RetrievalError",
    "ParallelIngestionError",
    "BuilderConsumedError",
    "EncoderError",
    # Version info
    "__version__",
]
