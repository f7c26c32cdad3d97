from authaudit.ir.errors import warning
from authaudit.ir.graph import FieldDefinition, coordinate
from authaudit.ir.validation import ValidationResult
from authaudit.pipeline.context import AuditContext
from authaudit.pipeline.stage import AuditStage


class RegistryBuildStage(AuditStage):
    """
    Walks every interface, then every object, recording declared requirements.

    Both passes must finish before any consistency check runs: an interface
    with no requirement of its own still needs checking as soon as one of its
    implementors declares something.
    """

    name = "registry_build"

    def run(self, context: AuditContext) -> ValidationResult:
        self._collect_interfaces(context)
        self._collect_objects(context)
        context.registry.freeze()

        context.debug("RegistryBuild", f"{len(context.registry)} coordinates with requirements")
        context.debug("RegistryBuild", f"Interfaces to check: {list(context.interfaces_that_need_checking)}")
        return ValidationResult.success()

    def _collect_interfaces(self, context: AuditContext):
        extractor = context.extractor
        for intf in context.graph.interface_types():
            needs_check = False

            if context.registry.record(intf.name, extractor.extract(intf)):
                needs_check = True
                context.add_finding(warning(
                    "INTERFACE_AUTH",
                    f'Interface "{intf.name}" specifies authorization directives. '
                    f'Future versions of federation may no longer allow them on interfaces.',
                    intf.name,
                ))

            interface_object_graphs = intf.interface_object_graphs
            for fld in intf.fields:
                coord = coordinate(intf.name, fld.name)
                is_interface_object_field = any(
                    j.graph in interface_object_graphs for j in fld.join_fields
                )

                if context.registry.record(coord, extractor.extract(fld)):
                    needs_check = True
                    if not is_interface_object_field:
                        context.add_finding(warning(
                            "INTERFACE_FIELD_AUTH",
                            f'Interface field "{coord}" specifies authorization directives. '
                            f'Future versions of federation may no longer allow them on interfaces fields.',
                            coord,
                        ))

                # only interface object fields resolve data through another subgraph
                if is_interface_object_field:
                    self._collect_dependencies(context, coord, fld)

            if needs_check:
                context.interfaces_that_need_checking[intf.name] = None

    def _collect_objects(self, context: AuditContext):
        extractor = context.extractor
        for obj in context.graph.object_types():
            has_auth = context.registry.record(obj.name, extractor.extract(obj))

            for fld in obj.fields:
                coord = coordinate(obj.name, fld.name)
                if context.registry.record(coord, extractor.extract(fld)):
                    has_auth = True
                self._collect_dependencies(context, coord, fld)

            if has_auth:
                for intf_name in obj.interfaces:
                    context.interfaces_that_need_checking[intf_name] = None

    def _collect_dependencies(self, context: AuditContext, coord: str, fld: FieldDefinition):
        for join_field in fld.join_fields:
            if join_field.requires:
                context.fields_with_cross_service_dependency[coord] = None
            if join_field.context_arguments:
                context.fields_with_context_forwarding[coord] = None
