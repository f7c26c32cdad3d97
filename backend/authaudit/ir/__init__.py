"""
Intermediate representations shared by the audit stages.
"""

from authaudit.ir.errors import (
    AuthorizationAuditError,
    Finding,
    GraphLoadError,
    Severity,
)
from authaudit.ir.graph import (
    AppliedDirective,
    CompositeType,
    ContextArgument,
    FeatureLink,
    LinkImport,
    FieldDefinition,
    JoinFieldRecord,
    JoinTypeRecord,
    SchemaGraph,
    coordinate,
)
from authaudit.ir.markers import MarkerHandle, MarkerKind, MarkerTable
from authaudit.ir.requirements import AccessRequirement, combine, equivalent
from authaudit.ir.registry import RequirementRegistry
from authaudit.ir.validation import ValidationResult

__all__ = [
    "AccessRequirement",
    "AppliedDirective",
    "AuthorizationAuditError",
    "CompositeType",
    "ContextArgument",
    "FeatureLink",
    "LinkImport",
    "FieldDefinition",
    "Finding",
    "GraphLoadError",
    "JoinFieldRecord",
    "JoinTypeRecord",
    "MarkerHandle",
    "MarkerKind",
    "MarkerTable",
    "RequirementRegistry",
    "SchemaGraph",
    "Severity",
    "ValidationResult",
    "combine",
    "coordinate",
    "equivalent",
]
