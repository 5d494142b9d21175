"""Typed shapes of what each agent role hands back.

Model answers are loose: sections arrive as objects, bare strings or lists,
and list items arrive as objects or bare names. Validators here coerce those
variants into one shape per role so downstream code can rely on attributes
instead of probing dictionaries. Unknown keys are kept (`extra="allow"`).
"""

import json
from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, model_validator

from app_builder.generate.roles import AgentRole


def _coerce_section(value: Any) -> Any:
    if isinstance(value, str):
        return {"description": value}
    if isinstance(value, list):
        return {"items": value}
    return value


Section = Annotated[Dict[str, Any], BeforeValidator(_coerce_section)]


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


Text = Annotated[str, BeforeValidator(_text)]


class Part(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class UiComponent(Part):
    name: Text = "Component"
    purpose: Text = ""
    code: Text = ""

    @model_validator(mode="before")
    @classmethod
    def _from_name(cls, data: Any) -> Any:
        return {"name": data} if isinstance(data, str) else data


class Endpoint(Part):
    path: Text
    method: Text = "GET"
    purpose: Text = ""
    code: Text = ""

    @model_validator(mode="before")
    @classmethod
    def _from_route(cls, data: Any) -> Any:
        # "POST /api/items" or just "/api/items"
        if isinstance(data, str):
            parts = data.split(None, 1)
            if len(parts) == 2 and not parts[0].startswith("/"):
                return {"method": parts[0].upper(), "path": parts[1]}
            return {"path": data}
        return data


class TableField(Part):
    name: Text
    type: Text = "TEXT"
    constraints: Text = ""

    @model_validator(mode="before")
    @classmethod
    def _from_name(cls, data: Any) -> Any:
        return {"name": data} if isinstance(data, str) else data


class Table(Part):
    name: Text
    purpose: Text = ""
    fields: List[TableField] = Field(default_factory=list)
    indexes: List[Any] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _from_name(cls, data: Any) -> Any:
        return {"name": data} if isinstance(data, str) else data


class DbSchema(Part):
    tables: List[Table] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _from_list(cls, data: Any) -> Any:
        return {"tables": data} if isinstance(data, list) else data


class QaCase(Part):
    type: Text = "unit"
    file: Text = "app.test.ts"
    code: Text = ""
    coverage: Text = ""

    @model_validator(mode="before")
    @classmethod
    def _from_name(cls, data: Any) -> Any:
        return {"coverage": data} if isinstance(data, str) else data


class Containers(Part):
    dockerfile: Text = ""
    compose: Text = ""
    kubernetes: Text = ""

    @model_validator(mode="before")
    @classmethod
    def _from_text(cls, data: Any) -> Any:
        return {"dockerfile": data} if isinstance(data, str) else data


class RolePayload(Part):
    kind: str

    @property
    def role(self) -> AgentRole:
        return AgentRole(self.kind)


class ArchitectPayload(RolePayload):
    kind: Literal["architect"] = "architect"
    architecture: Section
    stack: Section
    structure: Union[List[Any], Dict[str, Any]]


class UiUxPayload(RolePayload):
    kind: Literal["ui-ux"] = "ui-ux"
    design: Section
    components: List[UiComponent]
    layout: Section = Field(default_factory=dict)


class BackendPayload(RolePayload):
    kind: Literal["backend"] = "backend"
    api: Section
    endpoints: List[Endpoint]
    middleware: Section = Field(default_factory=dict)


class DatabasePayload(RolePayload):
    kind: Literal["database"] = "database"
    design: Section
    db_schema: DbSchema = Field(alias="schema")
    optimization: Section


class TesterPayload(RolePayload):
    kind: Literal["tester"] = "tester"
    strategy: Section
    tests: List[QaCase]
    quality: Section = Field(default_factory=dict)


class DeploymentPayload(RolePayload):
    kind: Literal["deployment"] = "deployment"
    strategy: Section
    containers: Containers
    cicd: Section


class UnparsedPayload(BaseModel):
    """Answer text that yielded no JSON object at all."""

    kind: Literal["unparsed"] = "unparsed"
    role: AgentRole
    raw: str
    fields: Dict[str, str] = Field(default_factory=dict)


AgentPayload = Annotated[
    Union[
        ArchitectPayload,
        UiUxPayload,
        BackendPayload,
        DatabasePayload,
        TesterPayload,
        DeploymentPayload,
        UnparsedPayload,
    ],
    Field(discriminator="kind"),
]

PAYLOAD_MODELS = {
    AgentRole.ARCHITECT: ArchitectPayload,
    AgentRole.UI_UX: UiUxPayload,
    AgentRole.BACKEND: BackendPayload,
    AgentRole.DATABASE: DatabasePayload,
    AgentRole.TESTER: TesterPayload,
    AgentRole.DEPLOYMENT: DeploymentPayload,
}

payload_adapter: TypeAdapter = TypeAdapter(AgentPayload)


def build_payload(role: AgentRole, data: Dict[str, Any]):
    """Validate a parsed answer as the payload of `role`.

    Raises pydantic.ValidationError when a required section is missing or
    has a shape the validators cannot coerce.
    """
    return PAYLOAD_MODELS[role].model_validate({**data, "kind": role.value})
