from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Severity(Enum):
    ERROR = "ERROR"      # Consistency defect, fails the run
    WARNING = "WARNING"  # Ambiguity, advisory only


@dataclass
class Finding:
    """A single audit finding tied to one or more graph coordinates"""
    severity: Severity
    code: str           # Machine-readable finding code
    message: str        # Fixed message template, filled in
    coordinates: List[str] = field(default_factory=list)
    detail: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_line(self) -> str:
        line = f"{self.severity.value}: {self.message}"
        if self.detail:
            line += "\n" + self.detail
        return line

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "coordinates": list(self.coordinates),
            "detail": self.detail,
        }


def error(code: str, message: str, *coordinates: str, detail: Optional[str] = None) -> Finding:
    return Finding(Severity.ERROR, code, message, list(coordinates), detail)


def warning(code: str, message: str, *coordinates: str, detail: Optional[str] = None) -> Finding:
    return Finding(Severity.WARNING, code, message, list(coordinates), detail)


class GraphLoadError(Exception):
    """Raised when a supergraph snapshot cannot be read or validated."""


class AuthorizationAuditError(Exception):
    """Raised by hosts that prefer an exception over an insecure report."""

    def __init__(self, message: str, findings: Optional[List[Finding]] = None):
        super().__init__(message)
        self.findings = findings or []
