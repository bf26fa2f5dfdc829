"""Document configuration shared by the builder, assembler and CLI."""

from __future__ import annotations

import dataclasses

from .geometry import DEFAULT_DPI, validate_dpi


@dataclasses.dataclass(frozen=True)
class DocumentConfig:
    """Settings applied to an assembled document.

    ``dpi`` is validated on construction, so an instance always carries a
    usable resolution.
    """

    dpi: float = DEFAULT_DPI
    title: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "dpi", validate_dpi(self.dpi))
        object.__setattr__(self, "title", "" if self.title is None else str(self.title))

    def with_dpi(self, dpi: float) -> "DocumentConfig":
        return dataclasses.replace(self, dpi=dpi)

    def with_title(self, title: str) -> "DocumentConfig":
        return dataclasses.replace(self, title=title)


__all__ = ["DocumentConfig"]
