"""Warnings for requirements on elements contributed by several subgraphs."""

from authaudit.config import AuditSettings
from authaudit.ir.graph import SchemaGraph
from authaudit.pipeline.controller import AuditController

POLICY = {"name": "policy", "arguments": {"policies": [["internal"]]}}


def run(graph_dict):
    return AuditController(settings=AuditSettings()).run(SchemaGraph.model_validate(graph_dict))


def test_shared_type_with_policy_warns_once():
    report = run({
        "objects": [{
            "name": "T",
            "directives": [POLICY],
            "join_types": [{"graph": "A", "key": "id"}, {"graph": "B", "key": "id"}],
            "fields": [{"name": "id", "join_fields": [{"graph": "A"}, {"graph": "B"}]}],
        }],
    })
    assert report.is_secure
    assert report.error_count == 0
    assert [f.code for f in report.findings] == ["MULTI_ORIGIN_TYPE"]
    assert report.findings[0].coordinates == ["T"]
    assert report.findings[0].message == (
        'Object "T" specifies authorization directives on its type and is defined in multiple graphs. '
        'Verify authorization configuration.'
    )


def test_single_origin_type_does_not_warn():
    report = run({
        "objects": [{"name": "T", "directives": [POLICY], "join_types": [{"graph": "A"}]}],
    })
    assert report.findings == []


def test_shared_field_with_requirement_warns():
    report = run({
        "objects": [{
            "name": "T",
            "join_types": [{"graph": "A"}, {"graph": "B"}],
            "fields": [
                {"name": "shared", "directives": [POLICY], "join_fields": [{"graph": "A"}, {"graph": "B"}]},
                {"name": "owned", "directives": [POLICY], "join_fields": [{"graph": "B"}]},
            ],
        }],
    })
    assert report.is_secure
    assert [f.coordinates for f in report.findings] == [["T.shared"]]
    assert report.findings[0].message == (
        'Field "T.shared" specifies authorization directives and is defined in multiple graphs. '
        'Verify authorization configuration.'
    )


def test_field_on_single_origin_type_does_not_warn():
    report = run({
        "objects": [{
            "name": "T",
            "join_types": [{"graph": "A"}],
            "fields": [{"name": "f", "directives": [POLICY], "join_fields": [{"graph": "A"}, {"graph": "A"}]}],
        }],
    })
    assert report.findings == []
