"""
Derived, read-only views handed to the presentation layer.
None of these are ever written back to the creature document.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ChildPart(BaseModel):
    id: str
    coverage: int
    name: str


class BodyPartState(BaseModel):
    part_id: str
    name: str
    max_hp: int
    current_hp: int
    health_percentage: int
    status: str
    status_is_custom: bool = False
    children: List[ChildPart] = Field(default_factory=list)


class BodyState(BaseModel):
    """Whole-body aggregate of every installed part."""

    anatomy_type: Optional[str] = None
    max_hp: int = 0
    current_hp: int = 0
    health_percentage: int = 100
    status: str = "healthy"
    injury_count: int = 0
    parts: Dict[str, BodyPartState] = Field(default_factory=dict)


class HitResult(BaseModel):
    target_part: str
    damage: float
    success: bool
    body_part: Optional[BodyPartState] = None
