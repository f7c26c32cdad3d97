import json
import os
from typing import Any

import yaml
from pydantic import ValidationError

from authaudit.ir.errors import GraphLoadError
from authaudit.ir.graph import SchemaGraph

SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


def parse_supergraph(data: Any, source: str = "<memory>") -> SchemaGraph:
    """Validate an already-decoded snapshot."""
    if not isinstance(data, dict):
        raise GraphLoadError(f"{source}: snapshot must be a mapping, got {type(data).__name__}")
    try:
        return SchemaGraph.model_validate(data)
    except ValidationError as e:
        raise GraphLoadError(f"{source}: invalid supergraph snapshot\n{e}") from e


def load_supergraph(path: str) -> SchemaGraph:
    """Load a supergraph snapshot from a JSON or YAML file."""
    extension = os.path.splitext(path)[1].lower()
    if extension not in SUPPORTED_EXTENSIONS:
        raise GraphLoadError(f"{path}: unsupported snapshot format '{extension}'")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if extension == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise GraphLoadError(f"{path}: cannot read snapshot: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise GraphLoadError(f"{path}: cannot parse snapshot: {e}") from e

    return parse_supergraph(data, source=path)
