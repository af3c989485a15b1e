"""
Anatomy assignment: install, swap or clear a creature's whole body-part set.

The new part set is staged locally and published as a single path-addressed
update, so no reader ever sees old and new parts mixed together. Old parts
are removed one id at a time rather than by overwriting the whole mapping.

Injuries reference part ids of the anatomy they were recorded against, so the
ledger is emptied whenever the part set is replaced or cleared.
"""

import logging
from typing import Any, Dict, Optional

from anatomy.errors import NotFoundError, ValidationError
from anatomy.utils.paths import DELETE_PREFIX

logger = logging.getLogger(__name__)


def _delete_parts_changes(document: Dict[str, Any]) -> Dict[str, Any]:
    return {
        f"body_parts.{DELETE_PREFIX}{part_id}": None
        for part_id in document.get("body_parts", {})
    }


def set_anatomy(
    db,
    registry,
    creature_id: str,
    anatomy_id: str,
    health_multiplier: float = 1.0,
    overrides: Optional[Dict[str, Dict[str, Any]]] = None,
) -> bool:
    """
    Replace the creature's body parts with a fresh copy of anatomy_id.

    Returns False, leaving the creature untouched, if the anatomy cannot be
    loaded or the creature does not exist.
    """
    try:
        anatomy = registry.instantiate(
            anatomy_id, health_multiplier=health_multiplier, overrides=overrides
        )
    except (NotFoundError, ValidationError) as e:
        logger.error(f"Failed to set anatomy '{anatomy_id}' for {creature_id}: {e}")
        return False

    def build(document: Dict[str, Any]) -> Dict[str, Any]:
        changes = _delete_parts_changes(document)
        for part_id, part in anatomy.body_parts.items():
            changes[f"body_parts.{part_id}"] = part.model_dump(mode="json")
        changes["anatomy_type"] = anatomy_id
        changes["injuries"] = []
        return changes

    try:
        db.creatures.update_with(creature_id, build)
    except (NotFoundError, ValueError) as e:
        # ValueError covers a document the creature model rejects
        logger.error(f"Failed to set anatomy '{anatomy_id}' for {creature_id}: {e}")
        return False

    logger.info(f"Set anatomy '{anatomy_id}' for {creature_id} ({len(anatomy.body_parts)} parts)")
    return True


def reset_anatomy(db, creature_id: str, clear_type: bool = True) -> bool:
    """Remove every body part (and the ledger); optionally forget the anatomy type."""

    def build(document: Dict[str, Any]) -> Dict[str, Any]:
        changes = _delete_parts_changes(document)
        changes["injuries"] = []
        if clear_type:
            changes["anatomy_type"] = None
        return changes

    try:
        db.creatures.update_with(creature_id, build)
    except NotFoundError as e:
        logger.error(f"Failed to reset anatomy: {e}")
        return False

    logger.info(f"Anatomy reset for {creature_id}{' (type cleared)' if clear_type else ''}")
    return True


def change_anatomy_type(db, registry, creature_id: str, anatomy_id: str) -> bool:
    """Alias of set_anatomy with default options."""
    return set_anatomy(db, registry, creature_id, anatomy_id)


def clear_anatomy(db, creature_id: str, clear_type: bool = True) -> bool:
    """Alias of reset_anatomy."""
    return reset_anatomy(db, creature_id, clear_type)
