from anatomy.services.hit_resolver import (
    RandomSource,
    derive_children,
    get_root_part,
    init_rng,
    resolve,
)
from anatomy.services.injury_ledger import (
    add_injury,
    update_injury,
    remove_injury,
    heal_part,
    heal_all,
    set_part_status,
    get_injuries_by_part,
    get_current_hp,
    derive_body_part_state,
    derive_body_state,
    status_for_percentage,
)
from anatomy.services.anatomy_assignment import (
    set_anatomy,
    reset_anatomy,
    change_anatomy_type,
    clear_anatomy,
)
from anatomy.services.combat_service import apply_body_part_damage, perform_hit

__all__ = [
    # Hit location
    "RandomSource",
    "derive_children",
    "get_root_part",
    "init_rng",
    "resolve",
    # Ledger
    "add_injury",
    "update_injury",
    "remove_injury",
    "heal_part",
    "heal_all",
    "set_part_status",
    "get_injuries_by_part",
    "get_current_hp",
    "derive_body_part_state",
    "derive_body_state",
    "status_for_percentage",
    # Assignment
    "set_anatomy",
    "reset_anatomy",
    "change_anatomy_type",
    "clear_anatomy",
    # Combat
    "apply_body_part_damage",
    "perform_hit",
]
