from .base_repository import BaseRepository
from .creature_repository import CreatureRepository
from .anatomy_template_repository import AnatomyTemplateRepository

__all__ = [
    "BaseRepository",
    "CreatureRepository",
    "AnatomyTemplateRepository",
]
