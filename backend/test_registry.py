"""Registry construction over interfaces and objects."""

import pytest

from authaudit.config import AuditSettings
from authaudit.ir.graph import SchemaGraph
from authaudit.ir.markers import MarkerTable
from authaudit.ir.registry import RequirementRegistry
from authaudit.ir.requirements import AccessRequirement
from authaudit.pipeline.context import AuditContext
from authaudit.pipeline.registry_stage import RegistryBuildStage

AUTH = {"name": "authenticated"}


def build_context(graph_dict):
    graph = SchemaGraph.model_validate(graph_dict)
    context = AuditContext(graph=graph, markers=MarkerTable.canonical(), settings=AuditSettings())
    result = RegistryBuildStage().run(context)
    assert result.is_valid
    return context


def test_graph_without_markers_builds_empty_sets():
    context = build_context({
        "interfaces": [{"name": "Node", "fields": [{"name": "id", "type": "ID!"}]}],
        "objects": [{"name": "User", "interfaces": ["Node"], "fields": [{"name": "id", "type": "ID!"}]}],
    })
    assert len(context.registry) == 0
    assert not context.interfaces_that_need_checking
    assert not context.fields_with_cross_service_dependency
    assert not context.fields_with_context_forwarding
    assert context.findings == []


def test_type_and_field_requirements_are_registered():
    context = build_context({
        "objects": [{
            "name": "Account",
            "directives": [AUTH],
            "fields": [
                {"name": "id", "type": "ID!"},
                {"name": "balance", "type": "Float", "directives": [
                    {"name": "requiresScopes", "arguments": {"scopes": [["read:balance"]]}},
                ]},
            ],
        }],
    })
    assert context.registry.get("Account") == AccessRequirement.from_facets(True)
    assert context.registry.get("Account.balance") == AccessRequirement.from_facets(scopes=[["read:balance"]])
    assert "Account.id" not in context.registry
    assert context.registry.frozen


def test_interfaces_with_requirements_warn_and_need_checking():
    context = build_context({
        "interfaces": [
            {"name": "Secret", "directives": [AUTH], "fields": [{"name": "id"}]},
            {"name": "Named", "fields": [{"name": "name", "directives": [AUTH]}]},
            {"name": "Plain", "fields": [{"name": "id"}]},
        ],
    })
    assert list(context.interfaces_that_need_checking) == ["Secret", "Named"]
    assert [f.code for f in context.findings] == ["INTERFACE_AUTH", "INTERFACE_FIELD_AUTH"]
    assert context.findings[0].message == (
        'Interface "Secret" specifies authorization directives. '
        'Future versions of federation may no longer allow them on interfaces.'
    )
    assert context.findings[1].message == (
        'Interface field "Named.name" specifies authorization directives. '
        'Future versions of federation may no longer allow them on interfaces fields.'
    )
    assert all(not f.is_error for f in context.findings)


def test_object_requirements_mark_implemented_interfaces():
    context = build_context({
        "interfaces": [{"name": "Node", "fields": [{"name": "id"}]}, {"name": "Timestamped"}],
        "objects": [
            {"name": "User", "interfaces": ["Node", "Timestamped"],
             "fields": [{"name": "id"}, {"name": "email", "directives": [AUTH]}]},
            {"name": "Tag", "interfaces": ["Node"], "fields": [{"name": "id"}]},
        ],
    })
    assert set(context.interfaces_that_need_checking) == {"Node", "Timestamped"}
    assert context.findings == []


def test_interface_object_fields_are_exempt_from_the_warning():
    context = build_context({
        "interfaces": [{
            "name": "Media",
            "join_types": [{"graph": "CATALOG", "key": "id"}, {"graph": "REVIEWS", "key": "id", "is_interface_object": True}],
            "fields": [
                {"name": "id", "join_fields": [{"graph": "CATALOG"}, {"graph": "REVIEWS"}]},
                {"name": "rating", "directives": [AUTH],
                 "join_fields": [{"graph": "REVIEWS", "requires": "id"}]},
                {"name": "title", "directives": [AUTH],
                 "join_fields": [{"graph": "CATALOG", "requires": "id"}]},
            ],
        }],
    })
    assert "Media.rating" in context.registry
    assert [f.coordinates for f in context.findings] == [["Media.title"]]
    # only interface object fields are candidates for transitive checks
    assert list(context.fields_with_cross_service_dependency) == ["Media.rating"]


def test_object_dependencies_are_collected():
    context = build_context({
        "objects": [{
            "name": "Product",
            "contexts": [],
            "fields": [
                {"name": "weight", "join_fields": [{"graph": "INVENTORY"}]},
                {"name": "shippingEstimate", "join_fields": [{"graph": "SHIPPING", "requires": "weight"}]},
                {"name": "discount", "join_fields": [{
                    "graph": "PRICING",
                    "context_arguments": [{"context": "USERS__viewer", "name": "tier", "selection": "{ tier }"}],
                }]},
            ],
        }],
    })
    assert list(context.fields_with_cross_service_dependency) == ["Product.shippingEstimate"]
    assert list(context.fields_with_context_forwarding) == ["Product.discount"]


def test_registry_rejects_duplicates_and_late_writes():
    registry = RequirementRegistry()
    requirement = AccessRequirement.from_facets(True)
    assert registry.record("T", requirement)
    assert not registry.record("U", None)
    with pytest.raises(ValueError):
        registry.record("T", requirement)
    registry.freeze()
    with pytest.raises(RuntimeError):
        registry.record("V", requirement)
