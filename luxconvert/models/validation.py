from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional


Severity = Literal["ERROR", "WARN", "INFO"]


@dataclass(frozen=True)
class ValidationFinding:
    id: str
    severity: Severity
    title: str
    message: str
    evidence: Dict[str, Any] = field(default_factory=dict)
    suggested_fix: Optional[str] = None


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    score: float
    warnings: List[str]
    errors: List[str]
    findings: List[ValidationFinding] = field(default_factory=list)

    @property
    def summary(self) -> Dict[str, int]:
        errors = sum(1 for f in self.findings if f.severity == "ERROR")
        warns = sum(1 for f in self.findings if f.severity == "WARN")
        info = sum(1 for f in self.findings if f.severity == "INFO")
        return {"errors": errors, "warnings": warns, "info": info}
