import json

import pytest
import yaml

from authaudit.ir.errors import GraphLoadError
from authaudit.loader import load_supergraph, parse_supergraph
from run_audit import main

SNAPSHOT = {
    "features": [{"url": "https://specs.apollo.dev/authenticated/v0.1"}],
    "interfaces": [{"name": "Node", "fields": [{"name": "id", "type": "ID!"}]}],
    "objects": [{
        "name": "User",
        "interfaces": ["Node"],
        "join_types": [{"graph": "USERS", "key": "id"}],
        "fields": [
            {"name": "id", "type": "ID!", "join_fields": [{"graph": "USERS"}]},
            {"name": "friends", "type": "[User!]!", "join_fields": [{"graph": "USERS"}]},
        ],
    }],
}


def test_load_json_snapshot(tmp_path):
    path = tmp_path / "supergraph.json"
    path.write_text(json.dumps(SNAPSHOT))
    graph = load_supergraph(str(path))
    assert [t.name for t in graph.object_types()] == ["User"]
    assert graph.get_type("User").field("friends").type == "User"
    assert [o.name for o in graph.possible_runtime_types("Node")] == ["User"]


def test_load_yaml_snapshot(tmp_path):
    path = tmp_path / "supergraph.yaml"
    path.write_text(yaml.safe_dump(SNAPSHOT))
    graph = load_supergraph(str(path))
    assert graph.features[0].identity == "https://specs.apollo.dev/authenticated"
    assert graph.features[0].version == "v0.1"


def test_unsupported_extension(tmp_path):
    path = tmp_path / "supergraph.graphql"
    path.write_text("type Query { a: Int }")
    with pytest.raises(GraphLoadError):
        load_supergraph(str(path))


def test_missing_and_malformed_files(tmp_path):
    with pytest.raises(GraphLoadError):
        load_supergraph(str(tmp_path / "missing.json"))

    broken = tmp_path / "broken.yaml"
    broken.write_text("objects: [unclosed")
    with pytest.raises(GraphLoadError):
        load_supergraph(str(broken))


def test_invalid_snapshots_are_rejected():
    with pytest.raises(GraphLoadError):
        parse_supergraph(["not", "a", "mapping"])
    with pytest.raises(GraphLoadError):
        parse_supergraph({"objects": [{"name": "T"}, {"name": "T"}]})
    with pytest.raises(GraphLoadError):
        parse_supergraph({"objects": [{"name": "T", "interfaces": ["Missing"]}]})


def test_command_line_host(tmp_path, capsys):
    assert main(["run_audit.py"]) == 1
    assert "supergraph not specified" in capsys.readouterr().out

    path = tmp_path / "supergraph.json"
    path.write_text(json.dumps(SNAPSHOT))
    assert main(["run_audit.py", str(path)]) == 0

    insecure = json.loads(json.dumps(SNAPSHOT))
    insecure["objects"][0]["fields"][0]["directives"] = [{"name": "authenticated"}]
    path.write_text(json.dumps(insecure))
    assert main(["run_audit.py", str(path)]) == 1
    assert 'ERROR: Interface field "Node.id" and object field "User.id"' in capsys.readouterr().out
