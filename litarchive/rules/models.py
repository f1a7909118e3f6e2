from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from litarchive.domain.entities import ContentKind


class ContentRules(BaseModel):
    # kind -> slug namespace; kinds sharing a namespace share slug uniqueness
    namespaces: dict[ContentKind, str]
    moderated_kinds: list[ContentKind] = Field(
        default_factory=lambda: [ContentKind.BLOG, ContentKind.VIDEO, ContentKind.AUDIO]
    )
    excerpt_length: int = 200

    @model_validator(mode="after")
    def _every_kind_has_namespace(self) -> "ContentRules":
        missing = [k.value for k in ContentKind if k not in self.namespaces]
        if missing:
            raise ValueError(f"namespaces missing for kinds: {', '.join(missing)}")
        return self


class SlugRules(BaseModel):
    transliterate: bool = False
    max_length: int = 120
    max_suffix: int = 1000
    fallback: str = "item"


class WorkflowRules(BaseModel):
    allow_resubmit: bool = True

    def flags(self) -> dict[str, bool]:
        return {"allow_resubmit": self.allow_resubmit}


class VisitorRules(BaseModel):
    window: Literal["all_time", "year", "month", "day"] = "all_time"
    initial_count: int = 0


class RbacRules(BaseModel):
    roles: dict[str, list[str]]
    public_permissions: list[str] = Field(default_factory=list)


class AbacRule(BaseModel):
    if_condition: dict[str, Any] = Field(alias="if")
    allow: list[str]

    model_config = ConfigDict(populate_by_name=True)


class AbacRules(BaseModel):
    content_rules: list[AbacRule] = Field(default_factory=list)


class Rules(BaseModel):
    content: ContentRules
    slugs: SlugRules = Field(default_factory=SlugRules)
    workflow: WorkflowRules = Field(default_factory=WorkflowRules)
    visitors: VisitorRules = Field(default_factory=VisitorRules)
    rbac: RbacRules
    abac: AbacRules = Field(default_factory=AbacRules)

    def namespace_for(self, kind: ContentKind) -> str:
        return self.content.namespaces[kind]

    def kinds_in_namespace(self, namespace: str) -> list[ContentKind]:
        return [k for k, ns in self.content.namespaces.items() if ns == namespace]

    def is_moderated(self, kind: ContentKind) -> bool:
        return kind in self.content.moderated_kinds
