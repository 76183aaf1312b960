from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol

from luxconvert.errors import ValidationError
from luxconvert.models.photometry import PhotometricRecord
from luxconvert.models.validation import ValidationFinding, ValidationResult


WARNING_PENALTY = 0.1


class Rule(Protocol):
    id: str
    def evaluate(self, record: PhotometricRecord) -> List[ValidationFinding]: ...


def score_for(warnings: int, errors: int) -> float:
    if errors:
        return 0.0
    return max(0.0, min(1.0, round(1.0 - WARNING_PENALTY * warnings, 10)))


@dataclass
class Validator:
    rules: List[Rule]

    def run(self, record: PhotometricRecord) -> ValidationResult:
        findings: List[ValidationFinding] = []
        try:
            record.validate()
        except ValidationError as e:
            findings.append(
                ValidationFinding(
                    id="RECORD_INVALID",
                    severity="ERROR",
                    title="Record validation failed",
                    message=e.message,
                    evidence=dict(e.context),
                )
            )
        else:
            for rule in self.rules:
                findings.extend(rule.evaluate(record))

        # stable ordering: severity, rule order preserved within a severity
        sev_order = {"ERROR": 0, "WARN": 1, "INFO": 2}
        findings.sort(key=lambda f: sev_order.get(f.severity, 99))

        errors = [f.message for f in findings if f.severity == "ERROR"]
        warnings = [f.message for f in findings if f.severity == "WARN"]
        return ValidationResult(
            is_valid=not errors,
            score=score_for(len(warnings), len(errors)),
            warnings=warnings,
            errors=errors,
            findings=findings,
        )
