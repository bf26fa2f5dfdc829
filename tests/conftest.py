from __future__ import annotations

from pathlib import Path
from typing import Callable
import sys

import pytest
from PIL import Image

_DEFAULT_COLORS = {
    "RGB": (200, 100, 50),
    "RGBA": (200, 100, 50, 128),
    "LA": (90, 128),
    "L": 128,
    "CMYK": (10, 20, 30, 40),
}

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def image_factory() -> Callable[..., Image.Image]:
    def _create(width: int, height: int, mode: str = "RGB", color=None) -> Image.Image:
        if color is None:
            color = _DEFAULT_COLORS.get(mode, 0)
        return Image.new(mode, (width, height), color)

    return _create


@pytest.fixture()
def scan_images(image_factory) -> list[Image.Image]:
    return [
        image_factory(600, 800, color=(255, 0, 0)),
        image_factory(300, 400, color=(0, 255, 0)),
        image_factory(1200, 1600, color=(0, 0, 255)),
    ]


@pytest.fixture()
def image_file_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, width: int = 40, height: int = 30, color=(10, 20, 30)) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", (width, height), color).save(path)
        return path

    return _create
