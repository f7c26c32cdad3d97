from dataclasses import dataclass
from typing import List
from .errors import Finding


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[Finding]

    @classmethod
    def success(cls):
        return cls(is_valid=True, errors=[])

    @classmethod
    def failure(cls, errors: List[Finding]):
        return cls(is_valid=False, errors=errors)

    @classmethod
    def from_findings(cls, findings: List[Finding]):
        errors = [f for f in findings if f.is_error]
        if errors:
            return cls.failure(errors)
        return cls.success()
