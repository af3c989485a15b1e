import logging
from pathlib import Path
from typing import Optional

from anatomy.database.db_manager import DBManager
from anatomy.errors import AnatomyError
from anatomy.templates.sources import DirectoryTemplateSource
from anatomy.templates.validation import validate_template
from anatomy.models.body import RegistryIndex

logger = logging.getLogger(__name__)


def seed_builtin_templates(db_path: str, template_dir: Optional[Path] = None) -> int:
    """
    Reads the registry index of a template folder and upserts every template
    into the database. Invalid templates are skipped and logged.
    Returns how many templates were stored.
    """
    source = DirectoryTemplateSource(template_dir)
    try:
        index = RegistryIndex.model_validate(source.get_index())
    except (AnatomyError, ValueError) as e:
        logger.warning(f"Template registry not readable in {source.directory}: {e}")
        return 0

    logger.info("Seeding built-in anatomy templates...")

    count = 0
    with DBManager(db_path) as db:
        db.create_tables()
        for anatomy_id, info in index.anatomies.items():
            try:
                document = source.fetch(anatomy_id, info)
                validate_template(document)
                db.anatomy_templates.upsert(info, document, is_builtin=True)
                count += 1
            except AnatomyError as e:
                logger.error(f"Failed to seed anatomy {anatomy_id}: {e}")

    logger.info(f"Seeding complete. {count} templates processed.")
    return count
