"""Duplicating templates into a workspace."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .request import Core


class TemplateEntityType(str, Enum):
    """Kind of entity created from a template."""

    AGENT = "agent"


@dataclass
class TemplateDuplicateResult:
    """The entity created by duplicating a template."""

    entity_id: str = ""
    entity_type: TemplateEntityType | str = ""
    log_id: str = field(default="", compare=False)


def _entity_type(value: Any) -> TemplateEntityType | str:
    text = str(value or "")
    try:
        return TemplateEntityType(text)
    except ValueError:
        return text


class Templates:
    """The /v1/templates endpoints."""

    def __init__(self, core: Core) -> None:
        self._core = core

    def duplicate(
        self, template_id: str, workspace_id: str, name: str | None = None
    ) -> TemplateDuplicateResult:
        """Copy the template into workspace_id, optionally under a new name."""
        body: dict[str, Any] = {"workspace_id": workspace_id}
        if name is not None:
            body["name"] = name
        payload, response = self._core.request(
            "POST", f"/v1/templates/{template_id}/duplicate", body
        )
        data = payload.get("data") or {}
        return TemplateDuplicateResult(
            entity_id=str(data.get("entity_id") or ""),
            entity_type=_entity_type(data.get("entity_type")),
            log_id=response.log_id(),
        )