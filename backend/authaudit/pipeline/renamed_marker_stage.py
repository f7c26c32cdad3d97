from authaudit.ir.errors import error
from authaudit.ir.validation import ValidationResult
from authaudit.pipeline.context import AuditContext
from authaudit.pipeline.stage import AuditStage


class RenamedMarkerStage(AuditStage):
    """Routers before v1.61.12 / v2.8.1 silently ignore renamed auth directives."""

    name = "renamed_markers"

    def run(self, context: AuditContext) -> ValidationResult:
        if not context.settings.check_renamed_markers:
            context.debug("RenamedMarkers", "check disabled")
            return ValidationResult.success()

        renamed = context.markers.renamed()
        if not renamed:
            return ValidationResult.success()

        finding = error(
            "RENAMED_AUTH_DIRECTIVES",
            "One or more authorization directive have been renamed. Make sure router version "
            "supports renamed authorization directives (v1.61.12+ or v2.8.1+).",
            *[f"@{handle.name}" for handle in renamed],
            detail="\n".join(
                f'- "@{handle.kind.canonical_name}" is renamed to "@{handle.name}"'
                for handle in renamed
            ),
        )
        context.add_finding(finding)
        return ValidationResult.failure([finding])
