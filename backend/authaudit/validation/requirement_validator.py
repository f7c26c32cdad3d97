"""
Requirement validators - semantic checks for transitive data access.

A field with @requires or @fromContext reads data selected from other
fields, possibly owned by other subgraphs. The field's own requirements
must already imply the requirements of everything it reads, otherwise the
dependency becomes a way around them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from authaudit.config import DebugLog, debug_printer
from authaudit.ir.graph import CompositeType, FieldDefinition, SchemaGraph, coordinate
from authaudit.ir.requirements import AccessRequirement, combine, implies
from authaudit.pipeline.extractor import RequirementExtractor
from authaudit.validation.selection_set import (
    FieldSelection,
    Selection,
    SelectionSetParseError,
    parse_selection_set,
)


@dataclass
class TransitiveFinding:
    coordinate: str
    message: str


class RequirementValidator(ABC):

    @abstractmethod
    def check_field_dependency(self, field_coordinate: str) -> List[TransitiveFinding]:
        pass

    @abstractmethod
    def check_context_forwarding(self, field_coordinate: str) -> List[TransitiveFinding]:
        pass


class NullRequirementValidator(RequirementValidator):
    """Accepts everything. For hosts that only want the structural checks."""

    def check_field_dependency(self, field_coordinate: str) -> List[TransitiveFinding]:
        return []

    def check_context_forwarding(self, field_coordinate: str) -> List[TransitiveFinding]:
        return []


class SelectionSetRequirementValidator(RequirementValidator):
    """
    Evaluates @requires and @fromContext selections against the graph.

    The current field's effective requirement is its parent type's
    requirement AND its own. Each selected field's effective requirement is
    its own AND that of its return type when that is a composite type. For
    context arguments the context source type's requirement is added too.
    """

    def __init__(
        self,
        graph: SchemaGraph,
        extractor: RequirementExtractor,
        log: Optional[DebugLog] = None,
    ):
        self.graph = graph
        self.extractor = extractor
        self.log = log or debug_printer(False)
        self._cache: Dict[str, Optional[AccessRequirement]] = {}

    def check_field_dependency(self, field_coordinate: str) -> List[TransitiveFinding]:
        resolved = self._resolve(field_coordinate)
        if resolved is None:
            return []
        parent, fld = resolved
        current = combine(self._requirement(parent), self._requirement(fld, parent.name))

        findings: List[TransitiveFinding] = []
        reported = set()
        for join_field in fld.join_fields:
            if not join_field.requires:
                continue
            try:
                selections = parse_selection_set(join_field.requires)
            except SelectionSetParseError as e:
                findings.append(TransitiveFinding(
                    field_coordinate,
                    f'Field "{field_coordinate}" has an invalid @requires selection set: {e}',
                ))
                continue

            for target_coord, target_req in self._walk(parent, selections):
                if target_coord in reported or implies(current, target_req):
                    continue
                reported.add(target_coord)
                findings.append(TransitiveFinding(
                    field_coordinate,
                    f'Field "{field_coordinate}" does not specify necessary @authenticated, '
                    f'@requiresScopes and/or @policy auth requirements to access the transitive '
                    f'field "{target_coord}" data from @requires selection set.',
                ))
        return findings

    def check_context_forwarding(self, field_coordinate: str) -> List[TransitiveFinding]:
        resolved = self._resolve(field_coordinate)
        if resolved is None:
            return []
        parent, fld = resolved
        current = combine(self._requirement(parent), self._requirement(fld, parent.name))

        findings: List[TransitiveFinding] = []
        reported = set()
        for join_field in fld.join_fields:
            for argument in join_field.context_arguments:
                if argument.context in reported:
                    continue
                try:
                    selections = parse_selection_set(argument.selection)
                except SelectionSetParseError as e:
                    reported.add(argument.context)
                    findings.append(TransitiveFinding(
                        field_coordinate,
                        f'Field "{field_coordinate}" has an invalid @fromContext selection set '
                        f'for context {argument.context}: {e}',
                    ))
                    continue

                if not self._context_satisfied(current, argument.context, selections):
                    reported.add(argument.context)
                    findings.append(TransitiveFinding(
                        field_coordinate,
                        f'Field "{field_coordinate}" does not specify necessary @authenticated, '
                        f'@requiresScopes and/or @policy auth requirements to access the transitive '
                        f'data in context {argument.context} from @fromContext selection set.',
                    ))
        return findings

    def _context_satisfied(self, current, context: str, selections: List[Selection]) -> bool:
        sources = self.graph.context_sources(context)
        self.log("TransitiveValidator", f"context {context} sources: {[s.name for s in sources]}")
        for source in sources:
            source_req = self._requirement(source)
            # an interface source hands over whichever implementor is returned
            runtime_types = [source]
            if self.graph.is_interface(source.name):
                runtime_types += self.graph.possible_runtime_types(source.name)

            for runtime in runtime_types:
                base = source_req if runtime is source else combine(source_req, self._requirement(runtime))
                if not implies(current, base):
                    return False
                for _, target_req in self._walk(runtime, selections, base):
                    if not implies(current, target_req):
                        return False
        return True

    def _walk(
        self,
        parent: CompositeType,
        selections: List[Selection],
        inherited: Optional[AccessRequirement] = None,
    ) -> Iterator[Tuple[str, Optional[AccessRequirement]]]:
        """
        Yield (coordinate, effective requirement) for every selected field.

        `inherited` is ANDed into everything beneath it. Narrowing to another
        type through an inline fragment adds that type's own requirement.
        """
        for selection in selections:
            if not isinstance(selection, FieldSelection):
                target, narrowed = parent, inherited
                if selection.type_condition and selection.type_condition != parent.name:
                    target = self.graph.get_type(selection.type_condition)
                    if target is None:
                        self.log("TransitiveValidator", f"unknown type condition '{selection.type_condition}', skipping")
                        continue
                    narrowed = combine(inherited, self._requirement(target))
                yield from self._walk(target, selection.selections, narrowed)
                continue

            if selection.name == "__typename":
                continue
            fld = parent.field(selection.name)
            if fld is None:
                self.log("TransitiveValidator", f"'{parent.name}' has no field '{selection.name}', skipping")
                continue

            return_type = self.graph.get_type(fld.type)
            requirement = combine(
                inherited,
                self._requirement(fld, parent.name),
                self._requirement(return_type) if return_type is not None else None,
            )
            yield coordinate(parent.name, fld.name), requirement

            if selection.selections and return_type is not None:
                yield from self._walk(return_type, selection.selections, inherited)

    def _resolve(self, field_coordinate: str) -> Optional[Tuple[CompositeType, FieldDefinition]]:
        type_name, _, field_name = field_coordinate.partition(".")
        parent = self.graph.get_type(type_name)
        fld = parent.field(field_name) if parent is not None else None
        if fld is None:
            self.log("TransitiveValidator", f"unknown coordinate '{field_coordinate}'")
            return None
        return parent, fld

    def _requirement(self, element, parent_name: Optional[str] = None) -> Optional[AccessRequirement]:
        key = coordinate(parent_name, element.name) if parent_name else element.name
        if key not in self._cache:
            self._cache[key] = self.extractor.extract(element)
        return self._cache[key]
