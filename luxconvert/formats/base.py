from __future__ import annotations

from typing import Any, List, Optional, Protocol, Tuple

from luxconvert.config import WriterOptions
from luxconvert.errors import ConversionError, ValidationError
from luxconvert.models.photometry import PhotometricRecord


class PhotometricCodec(Protocol):
    """Reads, writes and recognises one photometric file format."""

    format_id: str

    def read(self, data: bytes) -> Any: ...
    def parse(self, data: bytes) -> PhotometricRecord: ...
    def to_format(self, record: PhotometricRecord, options: Optional[WriterOptions] = None) -> Any: ...
    def from_format(self, file: Any) -> PhotometricRecord: ...
    def write(self, file: Any, options: Optional[WriterOptions] = None) -> bytes: ...
    def write_record(self, record: PhotometricRecord, options: Optional[WriterOptions] = None) -> bytes: ...
    def detect(self, data: bytes) -> Tuple[float, str]: ...
    def supported_versions(self) -> List[str]: ...
    def default_options(self) -> WriterOptions: ...


class CodecBase:
    """Shared plumbing; subclasses provide read/to_format/from_format/write/detect."""

    format_id = ""
    versions: Tuple[str, ...] = ()

    def parse(self, data: bytes) -> PhotometricRecord:
        return self.from_format(self.read(data))  # type: ignore[attr-defined]

    def supported_versions(self) -> List[str]:
        return list(self.versions)

    def default_options(self) -> WriterOptions:
        return WriterOptions()

    def resolve_options(self, options: Optional[WriterOptions]) -> WriterOptions:
        opts = options if options is not None else self.default_options()
        opts.validate(self.versions)
        return opts

    def write_record(self, record: PhotometricRecord, options: Optional[WriterOptions] = None) -> bytes:
        opts = self.resolve_options(options)
        try:
            record.validate()
        except ValidationError as e:
            raise ConversionError(
                "INVALID_RECORD",
                f"cannot write {self.format_id}: {e.message}",
                context=dict(e.context),
                cause=e,
            ) from e
        file = self.to_format(record, opts)  # type: ignore[attr-defined]
        return self.write(file, opts)  # type: ignore[attr-defined]

