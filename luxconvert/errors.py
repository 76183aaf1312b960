from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(str, Enum):
    SYNTAX = "syntax_error"
    SEMANTIC = "semantic_error"
    CONVERSION = "conversion_error"
    SYSTEM = "system_error"
    VALIDATION = "validation_error"


@dataclass(eq=False)
class PhotometricError(Exception):
    code: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    cause: Optional[BaseException] = None

    category = ErrorCategory.SYSTEM

    def __post_init__(self) -> None:
        if self.cause is not None and self.__cause__ is None:
            self.__cause__ = self.cause

    def with_context(self, **items: Any) -> "PhotometricError":
        self.context.update(items)
        return self

    def __str__(self) -> str:
        parts = [f"[{self.category.value}:{self.code}] {self.message}"]
        if self.context:
            ctx = ", ".join(f"{k}={self.context[k]}" for k in sorted(self.context))
            parts.append(f"context: {ctx}")
        if self.warnings:
            parts.append("warnings: " + "; ".join(self.warnings))
        if self.cause is not None:
            parts.append(f"cause: {self.cause}")
        return " | ".join(parts)


@dataclass(eq=False)
class FormatSyntaxError(PhotometricError):
    """Malformed or unparseable file structure."""

    category = ErrorCategory.SYNTAX


@dataclass(eq=False)
class SemanticError(PhotometricError):
    """Structurally valid data with physically invalid values."""

    category = ErrorCategory.SEMANTIC


@dataclass(eq=False)
class ConversionError(PhotometricError):
    """The record cannot be expressed in the target format, or writing failed."""

    category = ErrorCategory.CONVERSION


@dataclass(eq=False)
class ConverterSystemError(PhotometricError):
    """Environment-level failure, e.g. no parser recognised the input."""

    category = ErrorCategory.SYSTEM


@dataclass(eq=False)
class ValidationError(PhotometricError):
    category = ErrorCategory.VALIDATION


def syntax_error(code: str, message: str, line_no: Optional[int] = None, snippet: Optional[str] = None) -> FormatSyntaxError:
    ctx: Dict[str, Any] = {}
    if line_no is not None:
        ctx["line"] = line_no
    if snippet is not None:
        ctx["snippet"] = snippet.strip()[:60]
    return FormatSyntaxError(code, message, context=ctx)


@dataclass
class ErrorCollector:
    """Accumulates errors and warnings across a multi-step operation."""

    errors: List[PhotometricError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, err: PhotometricError) -> None:
        self.errors.append(err)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def to_error(self, code: str = "MULTIPLE_ERRORS", message: str = "operation failed") -> Optional[ConverterSystemError]:
        if not self.errors:
            return None
        first = self.errors[0]
        ctx: Dict[str, Any] = {"error_count": len(self.errors)}
        if len(self.errors) > 1:
            ctx["additional_errors"] = [str(e) for e in self.errors[1:]]
        return ConverterSystemError(code, message, context=ctx, warnings=list(self.warnings), cause=first)

    def clear(self) -> None:
        self.errors.clear()
        self.warnings.clear()
