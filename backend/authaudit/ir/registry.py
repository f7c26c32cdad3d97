from typing import Dict, Iterator, Optional, Tuple

from .requirements import AccessRequirement


class RequirementRegistry:
    """
    Coordinate -> requirement map for one audit run.

    Append-only while the graph is walked, read-only once frozen. Only
    declared requirements are stored, so a missing key simply means the
    coordinate declares nothing.
    """

    def __init__(self):
        self._requirements: Dict[str, AccessRequirement] = {}
        self._frozen = False

    def record(self, coordinate: str, requirement: Optional[AccessRequirement]) -> bool:
        """Store a requirement; returns False when there was nothing to store."""
        if self._frozen:
            raise RuntimeError("requirement registry is frozen")
        if requirement is None:
            return False
        if coordinate in self._requirements:
            raise ValueError(f"coordinate '{coordinate}' recorded twice")
        self._requirements[coordinate] = requirement
        return True

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, coordinate: str) -> Optional[AccessRequirement]:
        return self._requirements.get(coordinate)

    def __contains__(self, coordinate: str) -> bool:
        return coordinate in self._requirements

    def __len__(self) -> int:
        return len(self._requirements)

    def items(self) -> Iterator[Tuple[str, AccessRequirement]]:
        return iter(self._requirements.items())
