"""
Anatomy data definitions.

Template documents are authored in camelCase JSON (``maxHp``, ``bodyParts``);
the models accept both that form and their snake_case field names, and always
dump snake_case.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_STATUS = "healthy"


class BodyPart(BaseModel):
    """A single node of the body-part tree."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., description="Unique part key, e.g. 'torso'.")
    name: str = Field(..., description="Display name.")
    coverage: int = Field(
        ..., ge=0, le=10000,
        description="Parts-in-10000 chance of being hit when resolving at the parent.",
    )
    max_hp: int = Field(..., ge=0, alias="maxHp")
    parent: Optional[str] = None
    internal: bool = False
    tags: List[str] = Field(default_factory=list)
    # None means "derive from health"; any string sticks (e.g. 'severed')
    status_override: Optional[str] = Field(default=None, alias="statusOverride")

    @model_validator(mode="before")
    @classmethod
    def _normalize_template_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("parent") == "":
            data["parent"] = None
        # A plain 'status' (authored templates, override patches) replaces
        # any sticky override; the default status clears it.
        if "status" in data:
            status = data.pop("status")
            data.pop("statusOverride", None)
            data["status_override"] = status if status and status != DEFAULT_STATUS else None
        return data

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @classmethod
    def alias_keys(cls, patch: Dict[str, Any]) -> Dict[str, Any]:
        """Rewrite snake_case keys of a field patch to their authored aliases."""
        result = {}
        for key, value in patch.items():
            field = cls.model_fields.get(key)
            result[field.alias if field and field.alias else key] = value
        return result


class AnatomyTemplate(BaseModel):
    """Shared, read-only body-part tree for a creature category."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    description: str = ""
    body_parts: Dict[str, BodyPart] = Field(..., alias="bodyParts")

    def get_root_part(self) -> Optional[str]:
        for part_id, part in self.body_parts.items():
            if part.is_root:
                return part_id
        return None


class AnatomyInfo(BaseModel):
    """One entry of the registry index."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    file: Optional[str] = None
    category: str = "general"
    description: str = ""
    disabled: bool = False


class RegistryIndex(BaseModel):
    anatomies: Dict[str, AnatomyInfo] = Field(default_factory=dict)
    meta: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fill_entry_ids(cls, data: Any) -> Any:
        # Index entries are keyed by id and usually omit it in the body
        if isinstance(data, dict) and isinstance(data.get("anatomies"), dict):
            data = dict(data)
            data["anatomies"] = {
                key: {"id": key, **entry} if isinstance(entry, dict) else entry
                for key, entry in data["anatomies"].items()
            }
        return data


class CreatureAnatomy(BaseModel):
    """Per-creature copy of a template's body parts, ready to install."""

    anatomy_id: str
    body_parts: Dict[str, BodyPart] = Field(default_factory=dict)
