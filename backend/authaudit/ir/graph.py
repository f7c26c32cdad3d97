from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator
from typing import Any, Dict, List, Optional, Set

# ---- Directives and composition provenance ----

class AppliedDirective(BaseModel):
    name: str                                   # name as applied in the supergraph (may be renamed)
    arguments: Dict[str, Any] = Field(default_factory=dict)


class JoinTypeRecord(BaseModel):
    graph: str                                  # contributing subgraph
    key: Optional[str] = None
    is_interface_object: bool = False


class ContextArgument(BaseModel):
    context: str                                # context name set by some type
    name: str                                   # argument receiving the value
    type: str = "String"
    selection: str                              # selection evaluated on the context source


class JoinFieldRecord(BaseModel):
    graph: Optional[str] = None
    requires: Optional[str] = None              # field set pulled from other subgraphs
    context_arguments: List[ContextArgument] = Field(default_factory=list)


class LinkImport(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str                                   # "@authenticated"
    as_name: Optional[str] = Field(default=None, alias="as")


class FeatureLink(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    url: str                                    # e.g. https://specs.apollo.dev/policy/v0.1
    as_name: Optional[str] = Field(default=None, alias="as")
    imports: List[LinkImport] = Field(default_factory=list, alias="import")
    purpose: Optional[str] = Field(default=None, alias="for")

    @field_validator("imports", mode="before")
    @classmethod
    def _expand_bare_imports(cls, value: Any) -> Any:
        # import: ["@policy"] is shorthand for import: [{name: "@policy"}]
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value

    @property
    def identity(self) -> str:
        return self.url.rstrip("/").rsplit("/", 1)[0]

    @property
    def version(self) -> str:
        return self.url.rstrip("/").rsplit("/", 1)[-1]

    def local_name(self, canonical_name: str) -> str:
        """Name the directive is applied under: import alias, then link alias."""
        for imported in self.imports:
            if imported.name.lstrip("@") == canonical_name:
                return (imported.as_name or imported.name).lstrip("@")
        return (self.as_name or canonical_name).lstrip("@")


# ---- Schema elements ----

class FieldDefinition(BaseModel):
    name: str
    type: str = "String"                        # named return type, wrappers stripped
    directives: List[AppliedDirective] = Field(default_factory=list)
    join_fields: List[JoinFieldRecord] = Field(default_factory=list)

    @field_validator("type")
    @classmethod
    def _strip_wrappers(cls, value: str) -> str:
        return value.replace("[", "").replace("]", "").replace("!", "").strip()

    def applied(self, directive_name: str) -> List[AppliedDirective]:
        return [d for d in self.directives if d.name == directive_name]


class CompositeType(BaseModel):
    name: str
    fields: List[FieldDefinition] = Field(default_factory=list)
    interfaces: List[str] = Field(default_factory=list)
    directives: List[AppliedDirective] = Field(default_factory=list)
    join_types: List[JoinTypeRecord] = Field(default_factory=list)
    contexts: List[str] = Field(default_factory=list)   # contexts this type provides

    def applied(self, directive_name: str) -> List[AppliedDirective]:
        return [d for d in self.directives if d.name == directive_name]

    def field(self, name: str) -> Optional[FieldDefinition]:
        return next((f for f in self.fields if f.name == name), None)

    @property
    def interface_object_graphs(self) -> Set[str]:
        return {j.graph for j in self.join_types if j.is_interface_object}


def coordinate(type_name: str, field_name: Optional[str] = None) -> str:
    if field_name is None:
        return type_name
    return f"{type_name}.{field_name}"


# ---- Root graph ----

class SchemaGraph(BaseModel):
    """
    Read-only snapshot of a composed supergraph.

    Only the parts the authorization audit needs are modelled: interface and
    object types, their fields, applied directives, and the join records that
    say which subgraphs contribute each element.
    """
    features: List[FeatureLink] = Field(default_factory=list)
    interfaces: List[CompositeType] = Field(default_factory=list)
    objects: List[CompositeType] = Field(default_factory=list)

    _types: Dict[str, CompositeType] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_type_names(self):
        seen: Set[str] = set()
        for t in self.interfaces + self.objects:
            if t.name in seen:
                raise ValueError(f"duplicate type name '{t.name}'")
            seen.add(t.name)
            field_names = [f.name for f in t.fields]
            if len(field_names) != len(set(field_names)):
                raise ValueError(f"type '{t.name}' declares a field more than once")

        interface_names = {i.name for i in self.interfaces}
        for t in self.interfaces + self.objects:
            for name in t.interfaces:
                if name not in interface_names:
                    raise ValueError(f"type '{t.name}' implements unknown interface '{name}'")
        return self

    def model_post_init(self, __context: Any) -> None:
        self._types = {t.name: t for t in self.interfaces + self.objects}

    def interface_types(self) -> List[CompositeType]:
        return list(self.interfaces)

    def object_types(self) -> List[CompositeType]:
        return list(self.objects)

    def get_type(self, name: str) -> Optional[CompositeType]:
        return self._types.get(name)

    def is_interface(self, name: str) -> bool:
        return any(i.name == name for i in self.interfaces)

    def possible_runtime_types(self, interface_name: str) -> List[CompositeType]:
        """Object types implementing the interface, in declaration order."""
        return [o for o in self.objects if interface_name in o.interfaces]

    def context_sources(self, context: str) -> List[CompositeType]:
        return [t for t in self.interfaces + self.objects if context in t.contexts]
