"""
Weighted recursive hit location.

A hit aimed at a composite part (torso) may be absorbed by one of its
covering sub-parts (heart, lungs). Each child's coverage is its share, in
parts per 10000, of the parent's hit probability; whatever the children do
not cover lands on the parent itself.
"""

import logging
import random
from typing import Dict, List, Optional, Protocol

from anatomy.models.body import BodyPart
from anatomy.models.state import ChildPart

logger = logging.getLogger(__name__)

ROLL_RANGE = 10000


class RandomSource(Protocol):
    """Anything that draws uniform integers in [0, stop), e.g. random.Random."""

    def randrange(self, stop: int) -> int: ...


def init_rng(seed: Optional[int] = None) -> random.Random:
    """Return a random source, seeded when reproducible draws are wanted."""
    return random.Random(seed)


def derive_children(body_parts: Dict[str, BodyPart], part_id: str) -> List[ChildPart]:
    """
    All parts whose parent is part_id, highest coverage first.
    Ties keep installation order. Recomputed on every call.
    """
    children = [
        ChildPart(id=child_id, coverage=child.coverage, name=child.name)
        for child_id, child in body_parts.items()
        if child.parent == part_id
    ]
    return sorted(children, key=lambda c: c.coverage, reverse=True)


def get_root_part(body_parts: Dict[str, BodyPart]) -> Optional[str]:
    """The id of the part with no parent, or None for an empty anatomy."""
    for part_id, part in body_parts.items():
        if part.is_root:
            return part_id
    return None


def resolve(
    body_parts: Dict[str, BodyPart],
    start_part_id: str,
    rng: RandomSource,
    roll: Optional[int] = None,
) -> str:
    """
    Pick the part actually struck by a hit aimed at start_part_id.

    Args:
        roll: optional roll in [0, 10000) for the first level only; every
            deeper level always draws a fresh value from rng.

    Coverage sums are not validated: sums below 10000 leave the rest on the
    parent, and with sums above 10000 the lowest-coverage siblings can
    become unreachable.
    """
    children = derive_children(body_parts, start_part_id) if start_part_id in body_parts else []
    if not children:
        return start_part_id

    if roll is None:
        roll = rng.randrange(ROLL_RANGE)

    cumulative = 0
    for child in children:
        cumulative += child.coverage
        if roll < cumulative:
            logger.debug(f"Roll {roll} at '{start_part_id}' passes to '{child.id}'")
            return resolve(body_parts, child.id, rng)

    return start_part_id
