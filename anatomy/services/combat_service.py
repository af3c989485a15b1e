import logging
from typing import Optional

from anatomy.models.state import HitResult
from anatomy.services.hit_resolver import RandomSource, get_root_part, init_rng, resolve
from anatomy.services.injury_ledger import add_injury, derive_body_part_state

logger = logging.getLogger(__name__)


def apply_body_part_damage(
    db, creature_id: str, part_id: str, damage: float, damage_type: str = "blunt"
) -> bool:
    """Record damage against one part as a fresh ('raw') injury."""
    injury = add_injury(
        db,
        creature_id,
        part_id,
        damage,
        damage_type=damage_type or "blunt",
        source="direct",
        status="raw",
    )
    return injury is not None


def perform_hit(
    db,
    creature_id: str,
    damage: float,
    target_part: Optional[str] = None,
    rng: Optional[RandomSource] = None,
    damage_type: str = "blunt",
) -> Optional[HitResult]:
    """
    Resolve a hit aimed at target_part (the root when omitted) and record
    the damage on whichever part it lands on.

    Returns None if the creature is missing or has no body parts.
    """
    creature = db.creatures.get_model(creature_id)
    if creature is None:
        logger.warning(f"Cannot hit unknown creature '{creature_id}'")
        return None

    target_part = target_part or get_root_part(creature.body_parts)
    if not target_part:
        logger.warning(f"No valid body parts found for hit on '{creature_id}'")
        return None

    final_target = resolve(creature.body_parts, target_part, rng or init_rng())
    success = apply_body_part_damage(db, creature_id, final_target, damage, damage_type)

    updated = db.creatures.get_model(creature_id)
    body_part = derive_body_part_state(updated, final_target) if updated else None
    return HitResult(
        target_part=final_target,
        damage=damage,
        success=success,
        body_part=body_part,
    )
