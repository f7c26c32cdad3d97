"""
Marker table - which applied directives count as access-control markers.

The table maps each capability to the directive handle resolved for this
graph, or to nothing when the graph does not link that capability.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .graph import FeatureLink, SchemaGraph


class MarkerKind(Enum):
    AUTHENTICATED = "authenticated"
    REQUIRES_SCOPES = "requiresScopes"
    POLICY = "policy"

    @property
    def canonical_name(self) -> str:
        return self.value

    @property
    def identity(self) -> str:
        return f"https://specs.apollo.dev/{self.value}"

    @property
    def argument(self) -> Optional[str]:
        """Name of the list-of-lists argument carried by the marker."""
        return _ARGUMENTS[self]


_ARGUMENTS: Dict[MarkerKind, Optional[str]] = {
    MarkerKind.AUTHENTICATED: None,
    MarkerKind.REQUIRES_SCOPES: "scopes",
    MarkerKind.POLICY: "policies",
}

SUPPORTED_VERSIONS: Dict[MarkerKind, Tuple[str, ...]] = {
    MarkerKind.AUTHENTICATED: ("v0.1",),
    MarkerKind.REQUIRES_SCOPES: ("v0.1",),
    MarkerKind.POLICY: ("v0.1",),
}


@dataclass(frozen=True)
class MarkerHandle:
    kind: MarkerKind
    name: str
    version: str = "v0.1"

    @property
    def is_renamed(self) -> bool:
        return self.name != self.kind.canonical_name


@dataclass
class MarkerTable:
    handles: Dict[MarkerKind, MarkerHandle] = field(default_factory=dict)

    def get(self, kind: MarkerKind) -> Optional[MarkerHandle]:
        return self.handles.get(kind)

    def __iter__(self) -> Iterator[MarkerHandle]:
        for kind in MarkerKind:
            handle = self.handles.get(kind)
            if handle is not None:
                yield handle

    def __len__(self) -> int:
        return len(self.handles)

    def renamed(self) -> List[MarkerHandle]:
        return [h for h in self if h.is_renamed]

    @classmethod
    def canonical(cls) -> "MarkerTable":
        return cls({kind: MarkerHandle(kind, kind.canonical_name) for kind in MarkerKind})

    @classmethod
    def from_features(cls, features: List[FeatureLink]) -> "MarkerTable":
        handles: Dict[MarkerKind, MarkerHandle] = {}
        for kind in MarkerKind:
            link = next((f for f in features if f.identity == kind.identity), None)
            if link is None or link.version not in SUPPORTED_VERSIONS[kind]:
                continue
            name = link.local_name(kind.canonical_name)
            handles[kind] = MarkerHandle(kind, name, link.version)
        return cls(handles)

    @classmethod
    def for_graph(cls, graph: SchemaGraph) -> "MarkerTable":
        if not graph.features:
            return cls.canonical()
        return cls.from_features(graph.features)
