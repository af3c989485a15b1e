"""
Template sources: where raw anatomy documents come from.

A source exposes the registry index and hands out raw template documents by
id. Validation and caching are the registry's job, not the source's.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from anatomy.errors import NotFoundError, ValidationError
from anatomy.models.body import AnatomyInfo

logger = logging.getLogger(__name__)

BUILTIN_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "data" / "anatomy"
REGISTRY_FILENAME = "registry.json"


@runtime_checkable
class TemplateSource(Protocol):
    def get_index(self) -> Dict[str, Any]: ...

    def fetch(self, anatomy_id: str, info: Optional[AnatomyInfo] = None) -> Dict[str, Any]: ...


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise NotFoundError(f"File not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {path.name}: {e}") from e


class DirectoryTemplateSource:
    """
    Reads ``registry.json`` plus one JSON document per anatomy from a folder.

    registry.json layout:
        {"anatomies": {"humanoid": {"name": "Humanoid", "file": "humanoid.json"}},
         "meta": {"categories": {...}}}
    """

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory) if directory else BUILTIN_TEMPLATE_DIR

    def get_index(self) -> Dict[str, Any]:
        return _read_json(self.directory / REGISTRY_FILENAME)

    def fetch(self, anatomy_id: str, info: Optional[AnatomyInfo] = None) -> Dict[str, Any]:
        filename = info.file if info and info.file else f"{anatomy_id}.json"
        logger.debug(f"Reading anatomy '{anatomy_id}' from {filename}")
        return _read_json(self.directory / filename)

    def __repr__(self):
        return f"DirectoryTemplateSource({str(self.directory)!r})"
