from anatomy.models.body import (
    AnatomyInfo,
    AnatomyTemplate,
    BodyPart,
    CreatureAnatomy,
    RegistryIndex,
)
from anatomy.models.creature import DAMAGE_SCALE, Creature, Injury
from anatomy.models.state import BodyPartState, BodyState, ChildPart, HitResult

__all__ = [
    "AnatomyInfo",
    "AnatomyTemplate",
    "BodyPart",
    "CreatureAnatomy",
    "RegistryIndex",
    "DAMAGE_SCALE",
    "Creature",
    "Injury",
    "BodyPartState",
    "BodyState",
    "ChildPart",
    "HitResult",
]
