from abc import ABC, abstractmethod
from authaudit.pipeline.context import AuditContext
from authaudit.ir.validation import ValidationResult


class AuditStage(ABC):
    name: str

    @abstractmethod
    def run(self, context: AuditContext) -> ValidationResult:
        """
        Must:
        - read from context
        - write findings to context
        - NEVER call other stages
        """
        pass
