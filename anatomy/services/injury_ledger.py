"""
Injury ledger and derived health.

The ledger (``creature.injuries``) is the only source of truth for damage.
Hit points, percentages and statuses are derived from it on every read and
never written back.

Mutations go through ``db.creatures.update_with`` so each read-modify-write
runs inside one storage transaction. Failures that combat flow should survive
(unknown creature, part or injury) are logged and reported as None/False.
"""

import logging
import math
from typing import Any, Dict, List, Optional

from anatomy.errors import InvalidPartError, NotFoundError
from anatomy.models.creature import DAMAGE_SCALE, Creature, Injury
from anatomy.models.state import BodyPartState, BodyState
from anatomy.services.hit_resolver import derive_children

logger = logging.getLogger(__name__)

DESTROYED = "destroyed"
HEALTHY = "healthy"

_INJURY_ALIASES = {"partId": "part_id", "createdAt": "created_at"}


def to_fixed_point(raw_amount: float) -> int:
    """1.25 hp -> 125. Negative damage is treated as zero."""
    return math.floor(max(0.0, float(raw_amount or 0)) * DAMAGE_SCALE)


def normalize_amount(amount: Any) -> int:
    """Clamp an already fixed-point amount to a non-negative integer."""
    return max(0, int(amount or 0))


def status_for_percentage(percentage: int) -> str:
    if percentage == 0:
        return DESTROYED
    if percentage < 25:
        return "badly_injured"
    if percentage < 50:
        return "injured"
    if percentage < 75:
        return "bruised"
    return HEALTHY


def _health_percentage(current_hp: int, max_hp: int) -> int:
    return (current_hp * 100) // max_hp if max_hp > 0 else 100


# =============================================================================
# LEDGER MUTATIONS
# =============================================================================


def add_injury(
    db,
    creature_id: str,
    part_id: str,
    raw_amount: float,
    damage_type: str = "unknown",
    source: str = "",
    status: str = "raw",
) -> Optional[Injury]:
    """
    Append a damage event against an installed body part.

    Returns the stored Injury, or None if the creature or part is missing.
    """
    injury = Injury(
        part_id=part_id,
        amount=to_fixed_point(raw_amount),
        type=damage_type,
        status=status,
        source=source,
    )

    def build(document: Dict[str, Any]) -> Dict[str, Any]:
        if part_id not in document.get("body_parts", {}):
            raise InvalidPartError(f"Body part '{part_id}' is not installed on '{creature_id}'")
        injuries = document.get("injuries", [])
        if injuries:
            # Keep created_at non-decreasing along the ledger
            injury.created_at = max(injury.created_at, injuries[-1].get("created_at", 0))
        return {"injuries": injuries + [injury.model_dump(mode="json")]}

    try:
        db.creatures.update_with(creature_id, build)
    except (NotFoundError, InvalidPartError) as e:
        logger.warning(f"Injury not recorded: {e}")
        return None

    logger.debug(f"Injury {injury.id} on {creature_id}:{part_id} ({injury.amount}/{DAMAGE_SCALE})")
    return injury


def update_injury(db, creature_id: str, injury_id: str, patch: Dict[str, Any]) -> bool:
    """Patch one ledger entry in place. Returns False if it does not exist."""
    if not injury_id:
        return False
    patch = {_INJURY_ALIASES.get(k, k): v for k, v in patch.items() if k != "id"}

    def build(document: Dict[str, Any]) -> Dict[str, Any]:
        injuries = document.get("injuries", [])
        for idx, entry in enumerate(injuries):
            if entry.get("id") != injury_id:
                continue
            merged = {**entry, **patch}
            if "amount" in patch:
                merged["amount"] = normalize_amount(patch["amount"])
            updated = Injury.model_validate(merged)
            if updated.part_id not in document.get("body_parts", {}):
                raise InvalidPartError(f"Body part '{updated.part_id}' is not installed on '{creature_id}'")
            injuries[idx] = updated.model_dump(mode="json")
            return {"injuries": injuries}
        raise NotFoundError(f"Injury '{injury_id}' not found on '{creature_id}'")

    try:
        db.creatures.update_with(creature_id, build)
    except (NotFoundError, ValueError, TypeError) as e:
        # ValueError also covers InvalidPartError and rejected field types
        logger.warning(f"Injury not updated: {e}")
        return False
    return True


def remove_injury(db, creature_id: str, injury_id: str) -> bool:
    """Delete one ledger entry. Returns False if it does not exist."""
    if not injury_id:
        return False

    def build(document: Dict[str, Any]) -> Dict[str, Any]:
        injuries = document.get("injuries", [])
        kept = [entry for entry in injuries if entry.get("id") != injury_id]
        if len(kept) == len(injuries):
            raise NotFoundError(f"Injury '{injury_id}' not found on '{creature_id}'")
        return {"injuries": kept}

    try:
        db.creatures.update_with(creature_id, build)
    except NotFoundError as e:
        logger.warning(f"Injury not removed: {e}")
        return False
    return True


def heal_part(db, creature_id: str, part_id: str) -> int:
    """Remove every injury on one part. Returns how many were removed."""
    return _remove_matching(db, creature_id, lambda entry: entry.get("part_id") == part_id)


def heal_all(db, creature_id: str) -> int:
    """Empty the whole ledger. Returns how many injuries were removed."""
    return _remove_matching(db, creature_id, lambda entry: True)


def _remove_matching(db, creature_id: str, predicate) -> int:
    removed = 0

    def build(document: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        nonlocal removed
        injuries = document.get("injuries", [])
        kept = [entry for entry in injuries if not predicate(entry)]
        removed = len(injuries) - len(kept)
        return {"injuries": kept} if removed else None

    try:
        db.creatures.update_with(creature_id, build)
    except NotFoundError as e:
        logger.warning(f"Nothing healed: {e}")
        return 0
    if removed:
        logger.info(f"Healed {removed} injuries on {creature_id}")
    return removed


def set_part_status(db, creature_id: str, part_id: str, status: Optional[str]) -> bool:
    """
    Pin a custom status (e.g. 'severed') on a part, or pass None to go back
    to the status derived from health.
    """
    if status == HEALTHY:
        status = None

    def build(document: Dict[str, Any]) -> Dict[str, Any]:
        if part_id not in document.get("body_parts", {}):
            raise InvalidPartError(f"Body part '{part_id}' is not installed on '{creature_id}'")
        return {f"body_parts.{part_id}.status_override": status}

    try:
        db.creatures.update_with(creature_id, build)
    except (NotFoundError, ValueError) as e:
        logger.warning(f"Status not set: {e}")
        return False
    return True


# =============================================================================
# DERIVED STATE
# =============================================================================


def get_injuries_by_part(creature: Creature, part_id: str) -> List[Injury]:
    return [injury for injury in creature.injuries if injury.part_id == part_id]


def get_current_hp(creature: Creature, part_id: str) -> int:
    """max_hp minus whole hit points of accumulated damage, floored at zero."""
    part = creature.body_parts.get(part_id)
    if part is None:
        return 0
    total = sum(injury.amount for injury in get_injuries_by_part(creature, part_id))
    return max(0, part.max_hp - total // DAMAGE_SCALE)


def derive_body_part_state(creature: Creature, part_id: str) -> Optional[BodyPartState]:
    part = creature.body_parts.get(part_id)
    if part is None:
        return None

    current_hp = get_current_hp(creature, part_id)
    percentage = _health_percentage(current_hp, part.max_hp)
    custom = part.status_override is not None

    return BodyPartState(
        part_id=part_id,
        name=part.name,
        max_hp=part.max_hp,
        current_hp=current_hp,
        health_percentage=percentage,
        status=part.status_override if custom else status_for_percentage(percentage),
        status_is_custom=custom,
        children=derive_children(creature.body_parts, part_id),
    )


def derive_body_state(creature: Creature) -> BodyState:
    """Aggregate condition of the whole body."""
    parts = {
        part_id: derive_body_part_state(creature, part_id)
        for part_id in creature.body_parts
    }
    max_hp = sum(state.max_hp for state in parts.values())
    current_hp = sum(state.current_hp for state in parts.values())
    percentage = _health_percentage(current_hp, max_hp)

    return BodyState(
        anatomy_type=creature.anatomy_type,
        max_hp=max_hp,
        current_hp=current_hp,
        health_percentage=percentage,
        status=status_for_percentage(percentage) if parts else HEALTHY,
        injury_count=len(creature.injuries),
        parts=parts,
    )
