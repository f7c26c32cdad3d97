from dataclasses import dataclass, field
from typing import Dict, List

from authaudit.ir.errors import AuthorizationAuditError, Finding, Severity


@dataclass
class AuditReport:
    """Result of one audit run"""
    is_secure: bool
    findings: List[Finding] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.WARNING)

    @property
    def errors(self) -> List[Finding]:
        return [f for f in self.findings if f.is_error]

    def to_lines(self) -> List[str]:
        return [f.to_line() for f in self.findings]

    def to_dict(self) -> dict:
        return {
            "is_secure": self.is_secure,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "findings": [f.to_dict() for f in self.findings],
            "stats": self.stats,
        }

    def get_summary(self) -> str:
        """Get human-readable summary"""
        status = "Secure" if self.is_secure else "Insecure"
        return f"{status} | Errors: {self.error_count}, Warnings: {self.warning_count}"


def raise_on_insecure(report: AuditReport) -> None:
    """Raise if the report carries any error finding."""
    if report.is_secure:
        return
    messages = [f"[{f.code}] {f.message}" for f in report.errors]
    raise AuthorizationAuditError(
        f"Authorization audit failed with {report.error_count} errors:\n" + "\n".join(messages),
        findings=report.errors,
    )
