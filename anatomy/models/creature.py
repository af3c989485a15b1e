import time
import uuid
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from anatomy.models.body import BodyPart

# Damage amounts are stored as integers scaled by this factor (125 == 1.25 hp)
DAMAGE_SCALE = 100


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class Injury(BaseModel):
    """A single damage event in a creature's ledger."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    part_id: str = Field(..., alias="partId")
    amount: int = Field(0, ge=0, description="Fixed-point damage, x100.")
    type: str = "unknown"
    status: str = "raw"
    source: str = ""
    created_at: int = Field(default_factory=_now_ms, alias="createdAt")


class Creature(BaseModel):
    """
    The stored creature document.

    This is the single owner of both the installed body parts and the
    injury ledger; nothing derived from them is persisted.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., description="Unique creature key, e.g. 'goblin_01'.")
    name: str = ""
    anatomy_type: Optional[str] = None
    body_parts: Dict[str, BodyPart] = Field(default_factory=dict)
    injuries: List[Injury] = Field(default_factory=list)
