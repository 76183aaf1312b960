from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence, Tuple

from luxconvert.errors import ConversionError


MAX_PRECISION = 10


@dataclass(frozen=True)
class WriterOptions:
    """
    Output settings for a codec's writer.

    precision: decimal places for numeric output; None writes the shortest
    representation that reads back to the identical value.
    """

    precision: Optional[int] = None
    use_comma_decimal: bool = False
    format_version: str = ""
    custom_headers: Tuple[Tuple[str, str], ...] = ()

    def merged(self, **changes: Any) -> "WriterOptions":
        if "custom_headers" in changes:
            changes["custom_headers"] = tuple((str(k), str(v)) for k, v in changes["custom_headers"])
        return replace(self, **changes)

    def validate(self, supported_versions: Sequence[str] = ()) -> None:
        if self.precision is not None and not (0 <= self.precision <= MAX_PRECISION):
            raise ConversionError(
                "INVALID_OPTIONS",
                f"precision must be between 0 and {MAX_PRECISION}",
                context={"precision": self.precision},
            )
        if self.format_version and supported_versions and self.format_version not in supported_versions:
            raise ConversionError(
                "UNSUPPORTED_VERSION",
                f"format version {self.format_version!r} is not supported",
                context={"supported": ", ".join(supported_versions)},
            )
        for key, _ in self.custom_headers:
            if not key or any(c in key for c in "[]\r\n"):
                raise ConversionError("INVALID_OPTIONS", f"invalid custom header key {key!r}")
