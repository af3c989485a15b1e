"""
Dotted-path helpers for partial document updates.

Change keys address a single value ("body_parts.torso"). A final segment
written as "-=<key>" deletes <key> under the preceding path instead of
setting anything ("body_parts.-=torso"). Siblings of the addressed key are
never merged or touched.
"""

from typing import Any, Dict

DELETE_PREFIX = "-="


def get_path(data: Dict, path: str) -> Any:
    """Safely get nested dictionary value."""
    if not path:
        return None
    current = data
    for key in path.split("."):
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return None
    return current


def set_path(data: Dict, path: str, value: Any) -> bool:
    """Safely set nested dictionary value, creating path if needed."""
    if not path:
        return False
    keys = path.split(".")
    current = data
    for key in keys[:-1]:
        if key not in current:
            current[key] = {}
        current = current[key]
        if not isinstance(current, dict):
            return False  # Path blocked by non-dict
    current[keys[-1]] = value
    return True


def delete_path(data: Dict, path: str) -> bool:
    """Remove the key at path. Returns False if nothing was there."""
    if not path:
        return False
    parent_path, _, key = path.rpartition(".")
    parent = get_path(data, parent_path) if parent_path else data
    if not isinstance(parent, dict) or key not in parent:
        return False
    del parent[key]
    return True


def apply_changes(data: Dict, changes: Dict[str, Any]) -> Dict:
    """
    Apply path-addressed changes to data in place, in insertion order.

    Example:
        apply_changes(doc, {"body_parts.-=tail": None, "anatomy_type": "humanoid"})
    """
    for path, value in changes.items():
        parent_path, _, last = path.rpartition(".")
        if last.startswith(DELETE_PREFIX):
            target = last[len(DELETE_PREFIX):]
            delete_path(data, f"{parent_path}.{target}" if parent_path else target)
        elif not set_path(data, path, value):
            raise ValueError(f"Cannot set '{path}': path blocked by a non-object value")
    return data


def is_path_segment(key: str) -> bool:
    """True if key can be addressed as a single path segment."""
    return bool(key) and "." not in key and not key.startswith(DELETE_PREFIX)
