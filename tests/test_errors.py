from __future__ import annotations

import pytest

from luxconvert.errors import (
    ConversionError,
    ConverterSystemError,
    ErrorCategory,
    ErrorCollector,
    FormatSyntaxError,
    SemanticError,
    ValidationError,
    syntax_error,
)


def test_error_message_assembly():
    err = ConversionError("GRID_TOO_LARGE", "too many planes", context={"b": 2, "a": 1}, warnings=["w1", "w2"])
    assert str(err) == "[conversion_error:GRID_TOO_LARGE] too many planes | context: a=1, b=2 | warnings: w1; w2"


def test_error_message_omits_empty_sections():
    assert str(SemanticError("NEGATIVE_FLUX", "flux < 0")) == "[semantic_error:NEGATIVE_FLUX] flux < 0"


def test_error_cause_is_chained():
    inner = ValueError("boom")
    err = ConversionError("STEP_FAILED", "write failed", cause=inner)
    assert err.__cause__ is inner
    assert str(err).endswith("| cause: boom")


@pytest.mark.parametrize(
    "cls, category",
    [
        (FormatSyntaxError, ErrorCategory.SYNTAX),
        (SemanticError, ErrorCategory.SEMANTIC),
        (ConversionError, ErrorCategory.CONVERSION),
        (ConverterSystemError, ErrorCategory.SYSTEM),
        (ValidationError, ErrorCategory.VALIDATION),
    ],
)
def test_error_categories(cls, category):
    err = cls("CODE", "msg")
    assert err.category is category
    assert str(err).startswith(f"[{category.value}:CODE]")
    with pytest.raises(cls):
        raise err


def test_with_context_adds_items():
    err = SemanticError("X", "y").with_context(line=4)
    assert err.context == {"line": 4}


def test_syntax_error_helper_records_line_and_snippet():
    err = syntax_error("IES_NON_NUMERIC", "bad token", line_no=12, snippet="   abc def   ")
    assert isinstance(err, FormatSyntaxError)
    assert err.context == {"line": 12, "snippet": "abc def"}


def test_error_collector_to_error():
    c = ErrorCollector()
    assert c.to_error() is None
    assert not c.has_errors()

    c.add_warning("minor")
    c.add_error(SemanticError("A", "first"))
    c.add_error(SemanticError("B", "second"))
    assert c.has_errors() and c.has_warnings()

    err = c.to_error("BATCH_FAILED", "batch failed")
    assert isinstance(err, ConverterSystemError)
    assert err.cause is c.errors[0]
    assert err.context["error_count"] == 2
    assert err.context["additional_errors"] == ["[semantic_error:B] second"]
    assert err.warnings == ["minor"]

    c.clear()
    assert not c.has_errors() and not c.has_warnings()
