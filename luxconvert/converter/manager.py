"""
Conversion pipeline between photometric formats.

One manager is safe to share between threads: it holds only the immutable
format registry, and every call gets its own writer options.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from luxconvert.config import WriterOptions
from luxconvert.converter.registry import FormatRegistry, build_default_registry
from luxconvert.core.hashing import record_fingerprint, sha256_bytes
from luxconvert.errors import ConversionError, ConverterSystemError, PhotometricError, ValidationError
from luxconvert.models.conversion import (
    ConversionResult,
    FormatAlternative,
    FormatDetectionResult,
    FormatInfo,
)
from luxconvert.models.photometry import PhotometricRecord, validate_record
from luxconvert.models.validation import ValidationResult
from luxconvert.validation.defaults import default_validator
from luxconvert.validation.engine import Validator

log = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ALTERNATIVES = 3


def _run_step(step: str, fn: Callable[..., T], *args: Any) -> T:
    """Call one pipeline step, wrapping anything that is not a PhotometricError."""
    try:
        return fn(*args)
    except PhotometricError:
        raise
    except Exception as e:
        raise ConversionError(
            "STEP_FAILED",
            f"{step} failed: {e}",
            context={"step": step},
            cause=e,
        ) from e


class ConversionManager:
    def __init__(self, registry: Optional[FormatRegistry] = None, validator: Optional[Validator] = None) -> None:
        self._registry = registry if registry is not None else build_default_registry()
        self._validator = validator if validator is not None else default_validator()

    @property
    def registry(self) -> FormatRegistry:
        return self._registry

    def supported_formats(self) -> List[str]:
        return self._registry.ids()

    def detect_format(self, data: bytes) -> FormatDetectionResult:
        if not data:
            raise ConverterSystemError("EMPTY_INPUT", "empty data provided")

        scored = []
        for format_id in self._registry.ids():
            confidence, version = self._registry.codec(format_id).detect(data)
            log.debug("detect %s: confidence=%.2f version=%r", format_id, confidence, version)
            if confidence > 0:
                scored.append((confidence, format_id, version))
        if not scored:
            raise ConverterSystemError("UNKNOWN_FORMAT", "unable to detect format: no parser recognized the data")

        # highest confidence first; format id breaks ties
        scored.sort(key=lambda s: (-s[0], s[1]))
        best_conf, best_id, best_version = scored[0]
        alternatives = [
            FormatAlternative(format=fid, confidence=conf, version=ver)
            for conf, fid, ver in scored[1 : 1 + MAX_ALTERNATIVES]
        ]
        return FormatDetectionResult(
            format=best_id,
            confidence=best_conf,
            version=best_version,
            alternatives=alternatives,
        )

    def parse(self, data: bytes, format_id: str) -> PhotometricRecord:
        codec = self._registry.codec(format_id)
        return _run_step("parse", codec.parse, data)

    def write(self, record: PhotometricRecord, format_id: str, options: Optional[WriterOptions] = None) -> bytes:
        codec = self._registry.codec(format_id)
        return _run_step("write", codec.write_record, record, options)

    def validate_data(self, record: PhotometricRecord) -> ValidationResult:
        return self._validator.run(record)

    def validate_for_format(self, record: PhotometricRecord, format_id: str) -> None:
        self._registry.validator(format_id).validate(record)

    def format_info(self, format_id: str) -> FormatInfo:
        return self._registry.entry(format_id).info()

    def convert(
        self,
        data: bytes,
        source_format: str,
        target_format: str,
        options: Optional[WriterOptions] = None,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> ConversionResult:
        start = time.perf_counter()
        source = self._registry.codec(source_format)
        target = self._registry.codec(target_format)
        opts = options if options is not None else target.default_options()
        log.debug("converting %d bytes %s -> %s", len(data), source.format_id, target.format_id)

        try:
            native = _run_step("parse", source.read, data)
            record = _run_step("parse", source.from_format, native)
            if overrides:
                record = self._apply_overrides(record, overrides)
            _run_step("validate", validate_record, record)

            report = self.validate_data(record)
            if not report.is_valid:
                raise ValidationError(
                    "DATA_INVALID",
                    report.errors[0],
                    context={"source": source.format_id, "error_count": len(report.errors)},
                    warnings=report.errors[1:] + report.warnings,
                )
            warnings = list(report.warnings)
            source_issues = self._registry.validator(source.format_id).check_file(native)
            target_issues = self._registry.validator(target.format_id).check(record)
            warnings.extend(f"{source.format_id}: {w}" for w in source_issues)
            warnings.extend(f"{target.format_id}: {w}" for w in target_issues)

            output = _run_step("write", target.write_record, record, opts)
        except PhotometricError as e:
            log.warning("conversion %s -> %s failed (%s): %s", source.format_id, target.format_id, e.category.value, e.message)
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        nv, nh = record.photometry.shape
        metadata: Dict[str, Any] = {
            "source_format": source.format_id,
            "target_format": target.format_id,
            "source_version": source.detect(data)[1],
            "target_version": opts.format_version,
            "validation_score": report.score,
            "vertical_angles": nv,
            "horizontal_angles": nh,
            "input_sha256": sha256_bytes(data),
            "output_sha256": sha256_bytes(output),
            "record_sha256": record_fingerprint(record),
        }
        log.info(
            "converted %s -> %s in %.1f ms with %d warning(s)",
            source.format_id,
            target.format_id,
            elapsed_ms,
            len(warnings),
        )
        return ConversionResult(
            output=output,
            warnings=warnings,
            metadata=metadata,
            processing_time_ms=elapsed_ms,
        )

    @staticmethod
    def _apply_overrides(record: PhotometricRecord, overrides: Mapping[str, str]) -> PhotometricRecord:
        try:
            return record.with_metadata(**dict(overrides))
        except ValueError as e:
            raise ConversionError("INVALID_OVERRIDE", str(e), context={"fields": ", ".join(sorted(overrides))}, cause=e) from e
