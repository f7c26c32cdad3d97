"""
Access requirements - the normalized value compared across the graph.

A requirement has three independent facets: an authentication flag, scope
alternatives and policy alternatives. Scope and policy facets are in
disjunctive normal form: the outer sequence is an OR of alternatives, each
inner set is an AND of names.

A requirement with every facet unset does not exist as a value. Extraction
returns None instead, so "declares nothing" and "declares an empty
protection" compare the same while still differing from "authenticated
with no further scopes".
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Tuple

Alternatives = Tuple[FrozenSet[str], ...]
CanonicalAlternatives = Tuple[Tuple[str, ...], ...]


def to_alternatives(raw: Optional[Iterable[Iterable[str]]]) -> Alternatives:
    """Copy a list-of-lists argument verbatim, keeping duplicate alternatives."""
    if not raw:
        return ()
    return tuple(frozenset(str(name) for name in alternative) for alternative in raw)


def canonical(alternatives: Alternatives) -> CanonicalAlternatives:
    return tuple(sorted(tuple(sorted(alternative)) for alternative in alternatives))


def _has_names(alternatives: Alternatives) -> bool:
    return any(alternative for alternative in alternatives)


def _conjunction(left: Alternatives, right: Alternatives) -> Alternatives:
    if not left:
        return right
    if not right:
        return left
    return tuple(a | b for a in left for b in right)


def _dnf_implies(stronger: Alternatives, weaker: Alternatives) -> bool:
    # every way of satisfying `stronger` must satisfy some alternative of `weaker`
    if not weaker:
        return True
    if not stronger:
        return False
    return all(any(b <= a for b in weaker) for a in stronger)


def _display(alternatives: Alternatives) -> str:
    return "[" + ", ".join(
        "[" + ", ".join(alternative) + "]" for alternative in canonical(alternatives)
    ) + "]"


@dataclass(frozen=True, eq=False)
class AccessRequirement:
    requires_authentication: bool = False
    scope_sets: Alternatives = ()
    policy_sets: Alternatives = ()

    @classmethod
    def from_facets(
        cls,
        authenticated: bool = False,
        scopes: Optional[Iterable[Iterable[str]]] = None,
        policies: Optional[Iterable[Iterable[str]]] = None,
    ) -> Optional["AccessRequirement"]:
        """Build a requirement, or None when no facet is set."""
        scope_sets = to_alternatives(scopes)
        policy_sets = to_alternatives(policies)
        if not _has_names(scope_sets):
            scope_sets = ()
        if not _has_names(policy_sets):
            policy_sets = ()
        if not (authenticated or scope_sets or policy_sets):
            return None
        return cls(bool(authenticated), scope_sets, policy_sets)

    @property
    def fingerprint(self) -> Tuple[bool, CanonicalAlternatives, CanonicalAlternatives]:
        return (
            self.requires_authentication,
            canonical(self.scope_sets),
            canonical(self.policy_sets),
        )

    def __eq__(self, other):
        if not isinstance(other, AccessRequirement):
            return NotImplemented
        return self.fingerprint == other.fingerprint

    def __hash__(self):
        return hash(self.fingerprint)

    def implies(self, other: Optional["AccessRequirement"]) -> bool:
        """True when meeting this requirement always meets `other`."""
        if other is None:
            return True
        if other.requires_authentication and not self.requires_authentication:
            return False
        return (
            _dnf_implies(self.scope_sets, other.scope_sets)
            and _dnf_implies(self.policy_sets, other.policy_sets)
        )

    def __str__(self) -> str:
        result = f"{{ is_authenticated: {str(self.requires_authentication).lower()}"
        if self.scope_sets:
            result += f", scopes: {_display(self.scope_sets)}"
        if self.policy_sets:
            result += f", policies: {_display(self.policy_sets)}"
        return result + " }"


def equivalent(left: Optional[AccessRequirement], right: Optional[AccessRequirement]) -> bool:
    if left is None or right is None:
        return left is None and right is None
    return left == right


def implies(stronger: Optional[AccessRequirement], weaker: Optional[AccessRequirement]) -> bool:
    if weaker is None:
        return True
    if stronger is None:
        return False
    return stronger.implies(weaker)


def combine(*requirements: Optional[AccessRequirement]) -> Optional[AccessRequirement]:
    """AND together several requirements, skipping absent ones."""
    result: Optional[AccessRequirement] = None
    for requirement in requirements:
        if requirement is None:
            continue
        if result is None:
            result = requirement
            continue
        result = AccessRequirement(
            result.requires_authentication or requirement.requires_authentication,
            _conjunction(result.scope_sets, requirement.scope_sets),
            _conjunction(result.policy_sets, requirement.policy_sets),
        )
    return result


def describe(requirement: Optional[AccessRequirement]) -> str:
    return str(requirement) if requirement is not None else "{ none }"
