from authaudit.ir.errors import warning
from authaudit.ir.graph import coordinate
from authaudit.ir.validation import ValidationResult
from authaudit.pipeline.context import AuditContext
from authaudit.pipeline.stage import AuditStage


class MultiOriginStage(AuditStage):
    """
    Warns about requirements declared on elements contributed by several
    subgraphs. How those requirements merge depends on the composition
    version, so they are flagged for review instead of trusted. Advisory only.
    """

    name = "multi_origin"

    def run(self, context: AuditContext) -> ValidationResult:
        registry = context.registry
        count = 0

        for obj in context.graph.object_types():
            type_in_multiple_graphs = len(obj.join_types) != 1

            if obj.name in registry and type_in_multiple_graphs:
                count += 1
                context.add_finding(warning(
                    "MULTI_ORIGIN_TYPE",
                    f'Object "{obj.name}" specifies authorization directives on its type '
                    f'and is defined in multiple graphs. Verify authorization configuration.',
                    obj.name,
                ))

            for fld in obj.fields:
                coord = coordinate(obj.name, fld.name)
                if coord in registry and type_in_multiple_graphs and len(fld.join_fields) != 1:
                    count += 1
                    context.add_finding(warning(
                        "MULTI_ORIGIN_FIELD",
                        f'Field "{coord}" specifies authorization directives and is defined '
                        f'in multiple graphs. Verify authorization configuration.',
                        coord,
                    ))

        context.debug("MultiOrigin", f"{count} multi-origin warnings")
        return ValidationResult.success()
