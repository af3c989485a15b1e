"""
Template Validation
===================
Structural checks applied to raw anatomy documents before they are cached.

Pipeline Steps:
1.  **Shape:** Top-level ``id``/``name``/``bodyParts`` present, parts are objects.
2.  **Required part fields:** ``id``, ``name``, ``coverage``, ``maxHp``.
    ``status``/``internal``/``tags`` are defaulted by the model, not rejected.
3.  **Model parse:** Types and ranges (coverage 0..10000, maxHp >= 0).
4.  **Tree:** Exactly one root, every parent resolves, no cycles.

Usage:
    template = validate_template(raw_document)
"""

import logging
from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError

from anatomy.errors import ValidationError
from anatomy.models.body import AnatomyTemplate, BodyPart
from anatomy.utils.paths import DELETE_PREFIX, is_path_segment

logger = logging.getLogger(__name__)

REQUIRED_TEMPLATE_FIELDS = ("id", "name", "bodyParts")
REQUIRED_PART_FIELDS = ("id", "name", "coverage", "maxHp")

# snake_case spellings accepted in place of the authored camelCase ones
_FIELD_ALIASES = {"bodyParts": "body_parts", "maxHp": "max_hp"}


def _has_field(data: Dict[str, Any], field: str) -> bool:
    return field in data or _FIELD_ALIASES.get(field, field) in data


# =============================================================================
# TREE CHECKS
# =============================================================================


def check_tree(body_parts: Dict[str, BodyPart]) -> List[str]:
    """Return a list of problems with the parent/child structure (empty if sound)."""
    problems = []

    roots = [pid for pid, part in body_parts.items() if part.is_root]
    if not roots:
        problems.append("No root body part found (part with parent: null)")
    elif len(roots) > 1:
        problems.append(f"Multiple root body parts found: {sorted(roots)}")

    dangling = False
    for part_id, part in body_parts.items():
        if part.parent is not None and part.parent not in body_parts:
            problems.append(
                f"Body part '{part_id}' references non-existent parent '{part.parent}'"
            )
            dangling = True

    if dangling:
        return problems

    # Walk up from every part; revisiting a node before reaching a root is a cycle
    for part_id in body_parts:
        seen = set()
        current = part_id
        while current is not None:
            if current in seen:
                problems.append(f"Cycle detected in body part tree at '{part_id}'")
                break
            seen.add(current)
            current = body_parts[current].parent

    return problems


# =============================================================================
# MAIN PIPELINE
# =============================================================================


def validate_template(data: Any) -> AnatomyTemplate:
    """
    Validate a raw template document and build the immutable template.

    Raises:
        ValidationError: with every problem found in ``problems``.
    """
    if not isinstance(data, dict):
        raise ValidationError("Anatomy data must be an object")

    problems = [
        f"Missing required field: {field}"
        for field in REQUIRED_TEMPLATE_FIELDS
        if not _has_field(data, field)
    ]
    if problems:
        raise ValidationError(problems[0], problems)

    raw_parts = data.get("bodyParts", data.get("body_parts"))
    if not isinstance(raw_parts, dict):
        raise ValidationError("bodyParts must be an object")

    for part_id, raw_part in raw_parts.items():
        if not isinstance(raw_part, dict):
            problems.append(f"Body part '{part_id}' must be an object")
            continue
        for field in REQUIRED_PART_FIELDS:
            if not _has_field(raw_part, field):
                problems.append(f"Body part '{part_id}' missing required field: {field}")
    if problems:
        raise ValidationError(problems[0], problems)

    try:
        template = AnatomyTemplate.model_validate(data)
    except PydanticValidationError as e:
        problems = [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ValidationError(f"Invalid anatomy '{data.get('id')}': {problems[0]}", problems) from e

    for part_id, part in template.body_parts.items():
        if part.id != part_id:
            problems.append(f"Body part key '{part_id}' does not match its id '{part.id}'")
        if not is_path_segment(part_id):
            problems.append(
                f"Body part id '{part_id}' must be non-empty, without '.' and not start with '{DELETE_PREFIX}'"
            )

    problems.extend(check_tree(template.body_parts))
    if problems:
        for problem in problems:
            logger.debug(f"Template '{template.id}': {problem}")
        raise ValidationError(problems[0], problems)

    return template
