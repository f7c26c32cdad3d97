from typing import Any, Dict, List, Optional, Union

from authaudit.config import DebugLog, debug_printer
from authaudit.ir.graph import CompositeType, FieldDefinition
from authaudit.ir.markers import MarkerKind, MarkerTable
from authaudit.ir.requirements import AccessRequirement

Element = Union[CompositeType, FieldDefinition]


def _coerce_alternatives(value: Any) -> List[List[str]]:
    """Apply GraphQL list input coercion to a [[String!]!] argument."""
    if value is None:
        return []
    if isinstance(value, str):
        return [[value]]
    return [[item] if isinstance(item, str) else list(item) for item in value]


class RequirementExtractor:
    """
    Reads the access-control markers applied to one type or field.

    Each marker kind is looked up independently. Only the first application
    of a marker is used; repeated applications are invalid upstream and are
    ignored here rather than reported.
    """

    def __init__(self, markers: MarkerTable, log: Optional[DebugLog] = None):
        self.markers = markers
        self.log = log or debug_printer(False)

    def extract(self, element: Element) -> Optional[AccessRequirement]:
        facets: Dict[MarkerKind, Any] = {}

        for handle in self.markers:
            applications = element.applied(handle.name)
            if not applications:
                continue
            if len(applications) > 1:
                self.log("Extractor", f"@{handle.name} applied {len(applications)} times on '{element.name}', using the first")

            first = applications[0]
            if handle.kind.argument is None:
                facets[handle.kind] = True
            else:
                facets[handle.kind] = _coerce_alternatives(first.arguments.get(handle.kind.argument))

        return AccessRequirement.from_facets(
            authenticated=MarkerKind.AUTHENTICATED in facets,
            scopes=facets.get(MarkerKind.REQUIRES_SCOPES),
            policies=facets.get(MarkerKind.POLICY),
        )
