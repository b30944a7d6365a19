"""Pydantic models for the category/routing document (``config.yaml``).

Sparse YAML contract: either top-level key may be missing or empty, and
every list inside a category defaults to empty.  A ``default`` category is
always available, even when the document does not declare one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_CATEGORY = "default"

# Categories written into a fresh config.yaml by ``instr init``.
STARTER_CATEGORIES: dict[str, dict[str, list[str]]] = {
    "default": {"core": ["coding-standards"], "domains": [], "tools": []},
    "web": {"core": ["coding-standards"], "domains": ["web"], "tools": ["docker", "npm"]},
    "backend": {"core": ["coding-standards"], "domains": ["backend"], "tools": ["docker"]},
    "fullstack": {
        "core": ["coding-standards"],
        "domains": ["web", "backend"],
        "tools": ["docker"],
    },
    "infra": {
        "core": ["coding-standards"],
        "domains": ["devops"],
        "tools": ["docker", "terraform", "kubernetes"],
    },
}


class Category(BaseModel):
    """A named bundle of core stems, domain names, and tool names."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    core: tuple[str, ...] = ()
    domains: tuple[str, ...] = ()
    tools: tuple[str, ...] = ()

    @field_validator("core", "domains", "tools", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("core", "domains", "tools")
    @classmethod
    def _plain_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        # Entries name one file or directory inside their group, never a path.
        for entry in value:
            if not entry or entry in (".", "..") or "/" in entry or "\\" in entry:
                raise ValueError(f"not a plain name: {entry!r}")
        return value


@dataclass(frozen=True)
class RoutingRule:
    """Glob pattern matched against an absolute project path."""

    pattern: str
    category: str


class InstrConfig(BaseModel):
    """Root of ``config.yaml``: ``categories`` plus ordered ``routing``."""

    model_config = {"frozen": True}

    categories: dict[str, Category] = Field(default_factory=dict)
    routing: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _inject_names(cls, data: Any) -> Any:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return data
        data = dict(data)
        raw = data.get("categories") or {}
        if not isinstance(raw, dict):
            return data
        categories: dict[str, Any] = {}
        for name, body in raw.items():
            if body is None:
                body = {}
            if isinstance(body, dict):
                body = {**body, "name": str(name)}
            categories[str(name)] = body
        categories.setdefault(DEFAULT_CATEGORY, {"name": DEFAULT_CATEGORY})
        data["categories"] = categories
        data["routing"] = data.get("routing") or {}
        return data

    @property
    def rules(self) -> tuple[RoutingRule, ...]:
        """Routing rules in declaration order."""
        return tuple(RoutingRule(p, c) for p, c in self.routing.items())
