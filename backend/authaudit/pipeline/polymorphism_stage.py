"""
Polymorphism consistency - interfaces vs. their implementing object types.

A client selecting through an interface is authorized against the
interface's requirements, while the data comes from whichever object type
is returned at runtime. Any difference between the two lets data through
with the weaker of the two requirements.
"""

from typing import List, Optional

from authaudit.config import DebugLog, InterfacePolicy, debug_printer
from authaudit.ir.errors import Finding, error, warning
from authaudit.ir.graph import CompositeType, SchemaGraph, coordinate
from authaudit.ir.registry import RequirementRegistry
from authaudit.ir.requirements import describe, equivalent
from authaudit.ir.validation import ValidationResult
from authaudit.pipeline.context import AuditContext
from authaudit.pipeline.stage import AuditStage


class PolymorphismChecker:
    """
    Compares type- and field-level requirements across one interface
    hierarchy at a time.

    Usage:
        checker = PolymorphismChecker(graph, registry)
        if not checker.check_interface("Node"):
            for finding in checker.findings:
                print(finding.to_line())
    """

    def __init__(
        self,
        graph: SchemaGraph,
        registry: RequirementRegistry,
        policy: InterfacePolicy = InterfacePolicy.STRICT,
        log: Optional[DebugLog] = None,
    ):
        self.graph = graph
        self.registry = registry
        self.policy = policy
        self.log = log or debug_printer(False)
        self.findings: List[Finding] = []

    def check_interface(self, interface_name: str) -> bool:
        intf = self.graph.get_type(interface_name)
        if intf is None or not self.graph.is_interface(interface_name):
            self.log("Polymorphism", f"'{interface_name}' is not an interface, skipping")
            return True

        implementors = self.graph.possible_runtime_types(interface_name)
        self.log("Polymorphism", f"{interface_name}: {[o.name for o in implementors]}")

        # no short-circuit, both levels always report
        type_secure = self._check_type_level(intf, implementors)
        fields_secure = self._check_field_level(intf, implementors)
        return type_secure and fields_secure

    def _check_type_level(self, intf: CompositeType, implementors: List[CompositeType]) -> bool:
        intf_req = self.registry.get(intf.name)

        if intf_req is None and self.policy == InterfacePolicy.LENIENT:
            impl_reqs = [self.registry.get(impl.name) for impl in implementors]
            agreed = impl_reqs[0] if impl_reqs else None
            if agreed is not None and all(equivalent(agreed, r) for r in impl_reqs):
                self.findings.append(warning(
                    "INTERFACE_MISSING_REQUIREMENT",
                    f'Interface "{intf.name}" does not specify access control requirements but all '
                    f'of its implementations require {agreed}. Consider declaring them on the interface.',
                    intf.name,
                ))
                return True

        secure = True
        for impl in implementors:
            impl_req = self.registry.get(impl.name)
            if not equivalent(intf_req, impl_req):
                secure = False
                self.findings.append(error(
                    "INTERFACE_TYPE_MISMATCH",
                    f'Interface "{intf.name}" and object type "{impl.name}" define different '
                    f'access control requirements.',
                    intf.name,
                    impl.name,
                    detail=f"\t{intf.name} {describe(intf_req)}\n\t{impl.name} {describe(impl_req)}",
                ))
        return secure

    def _check_field_level(self, intf: CompositeType, implementors: List[CompositeType]) -> bool:
        secure = True
        for intf_field in intf.fields:
            intf_coord = coordinate(intf.name, intf_field.name)
            intf_field_req = self.registry.get(intf_coord)

            for impl in implementors:
                impl_field = impl.field(intf_field.name)
                if impl_field is None:
                    continue

                impl_coord = coordinate(impl.name, impl_field.name)
                impl_field_req = self.registry.get(impl_coord)
                if not equivalent(intf_field_req, impl_field_req):
                    secure = False
                    self.findings.append(error(
                        "INTERFACE_FIELD_MISMATCH",
                        f'Interface field "{intf_coord}" and object field "{impl_coord}" defines '
                        f'different access control requirements.',
                        intf_coord,
                        impl_coord,
                        detail=f"\t{intf_coord} {describe(intf_field_req)}\n\t{impl_coord} {describe(impl_field_req)}",
                    ))
        return secure


class PolymorphismStage(AuditStage):
    name = "polymorphism"

    def run(self, context: AuditContext) -> ValidationResult:
        checker = PolymorphismChecker(
            context.graph,
            context.registry,
            policy=context.settings.interface_policy,
            log=context.log,
        )

        secure = True
        for interface_name in sorted(context.interfaces_that_need_checking):
            secure = checker.check_interface(interface_name) and secure

        context.findings.extend(checker.findings)
        context.debug("Polymorphism", f"Checked {len(context.interfaces_that_need_checking)} interfaces, secure={secure}")

        if not secure:
            return ValidationResult.failure([f for f in checker.findings if f.is_error])
        return ValidationResult.success()
