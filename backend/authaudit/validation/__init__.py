"""
Validation module for transitive requirement checks.
"""

from authaudit.validation.requirement_validator import (
    NullRequirementValidator,
    RequirementValidator,
    SelectionSetRequirementValidator,
    TransitiveFinding,
)
from authaudit.validation.selection_set import (
    FieldSelection,
    InlineFragment,
    SelectionSetParseError,
    parse_selection_set,
)

__all__ = [
    "FieldSelection",
    "InlineFragment",
    "NullRequirementValidator",
    "RequirementValidator",
    "SelectionSetParseError",
    "SelectionSetRequirementValidator",
    "TransitiveFinding",
    "parse_selection_set",
]
