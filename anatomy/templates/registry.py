"""
Anatomy Registry
================
Loads anatomy templates from a source, validates and caches them by id, and
hands out per-creature copies.

The registry is an explicit object: create one per process (or per test) and
pass it to the services that need it.
"""

import copy
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from anatomy.errors import NotFoundError, ValidationError
from anatomy.models.body import (
    AnatomyInfo,
    AnatomyTemplate,
    BodyPart,
    CreatureAnatomy,
    RegistryIndex,
)
from anatomy.templates.sources import DirectoryTemplateSource, TemplateSource
from anatomy.templates.validation import validate_template

logger = logging.getLogger(__name__)

# Index ids starting with this marker are internal and never listed
INTERNAL_MARKER = "_"


class AnatomyRegistry:
    """
    Cached access to anatomy templates.

    Usage:
        registry = AnatomyRegistry(DirectoryTemplateSource())
        humanoid = registry.load("humanoid")
        parts = registry.instantiate("humanoid", health_multiplier=1.5)
    """

    def __init__(self, source: Optional[TemplateSource] = None):
        self.source = source or DirectoryTemplateSource()
        self.index: Optional[RegistryIndex] = None
        self._cache: Dict[str, AnatomyTemplate] = {}

    @property
    def initialized(self) -> bool:
        return self.index is not None

    def initialize(self):
        """Read the registry index once. Subsequent calls are no-ops."""
        if self.initialized:
            return
        logger.info(f"Initializing anatomy registry from {self.source!r}")
        raw_index = self.source.get_index()
        try:
            self.index = RegistryIndex.model_validate(raw_index)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid anatomy registry index: {e}") from e
        logger.info(f"Anatomy registry initialized. Found {len(self.index.anatomies)} anatomies.")

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------

    def load(self, anatomy_id: str) -> AnatomyTemplate:
        """
        Get a validated template, fetching it from the source on first use.

        Raises:
            NotFoundError: anatomy_id is not in the registry index
            ValidationError: the template document is malformed
        """
        self.initialize()

        if anatomy_id in self._cache:
            return self._cache[anatomy_id]

        info = self.get_info(anatomy_id)
        if info is None:
            raise NotFoundError(f"Anatomy '{anatomy_id}' not found in registry")

        try:
            raw = self.source.fetch(anatomy_id, info)
            template = validate_template(raw)
        except ValidationError as e:
            logger.error(f"Failed to load anatomy '{anatomy_id}': {e}")
            raise

        self._cache[anatomy_id] = template
        logger.info(f"Loaded anatomy: {anatomy_id}")
        return template

    def instantiate(
        self,
        anatomy_id: str,
        health_multiplier: float = 1.0,
        overrides: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> CreatureAnatomy:
        """
        Deep-copy a template's body parts for installation on one creature.

        Args:
            health_multiplier: every max_hp becomes ceil(max_hp * multiplier)
            overrides: part id -> field patch, re-validated per part
        """
        template = self.load(anatomy_id)
        overrides = overrides or {}

        unknown = set(overrides) - set(template.body_parts)
        if unknown:
            logger.warning(f"Ignoring overrides for unknown parts in '{anatomy_id}': {sorted(unknown)}")

        body_parts: Dict[str, BodyPart] = {}
        for part_id, part in template.body_parts.items():
            data = part.model_dump(by_alias=True)
            if health_multiplier != 1.0:
                data["maxHp"] = math.ceil(part.max_hp * health_multiplier)
            if part_id in overrides:
                patch = {k: v for k, v in overrides[part_id].items() if k != "id"}
                data.update(BodyPart.alias_keys(copy.deepcopy(patch)))
            try:
                body_parts[part_id] = BodyPart.model_validate(data)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid override for part '{part_id}': {e}") from e

        return CreatureAnatomy(anatomy_id=anatomy_id, body_parts=body_parts)

    # -------------------------------------------------------------------------
    # Index queries
    # -------------------------------------------------------------------------

    def get_info(self, anatomy_id: str) -> Optional[AnatomyInfo]:
        self.initialize()
        return self.index.anatomies.get(anatomy_id)

    def get_display_name(self, anatomy_id: str) -> str:
        info = self.get_info(anatomy_id)
        return info.name if info else anatomy_id

    def list_available(self) -> List[Tuple[str, AnatomyInfo]]:
        """Index entries that are neither disabled nor internal, in index order."""
        self.initialize()
        return [
            (anatomy_id, info)
            for anatomy_id, info in self.index.anatomies.items()
            if not info.disabled and not anatomy_id.startswith(INTERNAL_MARKER)
        ]

    def get_stats(self) -> Dict[str, Any]:
        anatomies = self.index.anatomies if self.index else {}
        categories = (self.index.meta.get("categories") if self.index else None) or {}
        return {
            "initialized": self.initialized,
            "registered_anatomies": len(anatomies),
            "cached_anatomies": len(self._cache),
            "available_categories": list(categories),
        }

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def clear_cache(self):
        self._cache.clear()
        logger.info("Anatomy cache cleared")

    def reload(self):
        """Drop the index and every cached template, then re-read the index."""
        self.index = None
        self.clear_cache()
        self.initialize()
