from typing import Callable, Optional

from authaudit.ir.errors import error
from authaudit.ir.validation import ValidationResult
from authaudit.pipeline.context import AuditContext
from authaudit.pipeline.stage import AuditStage
from authaudit.validation.requirement_validator import (
    RequirementValidator,
    SelectionSetRequirementValidator,
)

ValidatorFactory = Callable[[AuditContext], RequirementValidator]


def default_validator_factory(context: AuditContext) -> RequirementValidator:
    return SelectionSetRequirementValidator(
        context.graph, context.extractor, log=context.log
    )


class TransitiveExposureStage(AuditStage):
    """
    Forwards fields that read data through @requires or @fromContext to the
    requirement validator. This stage only knows which coordinates are
    candidates; what their selections resolve to is the validator's job.
    """

    name = "transitive_exposure"

    def __init__(self, validator_factory: Optional[ValidatorFactory] = None):
        self.validator_factory = validator_factory or default_validator_factory

    def run(self, context: AuditContext) -> ValidationResult:
        validator = self.validator_factory(context)
        errors = []

        for coord in sorted(context.fields_with_cross_service_dependency):
            for result in validator.check_field_dependency(coord):
                errors.append(error("REQUIRES_TRANSITIVE_AUTH", result.message, coord))

        for coord in sorted(context.fields_with_context_forwarding):
            for result in validator.check_context_forwarding(coord):
                errors.append(error("CONTEXT_TRANSITIVE_AUTH", result.message, coord))

        context.findings.extend(errors)
        context.debug(
            "TransitiveExposure",
            f"{len(context.fields_with_cross_service_dependency)} @requires fields, "
            f"{len(context.fields_with_context_forwarding)} @fromContext fields, {len(errors)} errors",
        )

        if errors:
            return ValidationResult.failure(errors)
        return ValidationResult.success()
