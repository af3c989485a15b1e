import logging

from dotenv import load_dotenv

from anatomy.config import Settings
from anatomy.database.db_manager import DBManager
from anatomy.models.creature import Creature
from anatomy.services.anatomy_assignment import set_anatomy
from anatomy.services.combat_service import perform_hit
from anatomy.services.hit_resolver import init_rng
from anatomy.services.injury_ledger import derive_body_state
from anatomy.services.template_seeding import seed_builtin_templates
from anatomy.templates.registry import AnatomyRegistry
from anatomy.utils.logger_config import setup_logging

logger = logging.getLogger(__name__)

DEMO_CREATURE = "training_target"


def run(settings: Settings):
    with DBManager(settings.db_path) as db:
        db.create_tables()

    seed_builtin_templates(settings.db_path, settings.template_dir)

    with DBManager(settings.db_path) as db:
        registry = AnatomyRegistry(db.anatomy_templates)
        for anatomy_id, info in registry.list_available():
            parts = registry.load(anatomy_id).body_parts
            print(f"{anatomy_id:<12} {info.name:<16} {len(parts):>3} parts  [{info.category}]")
        logger.info(f"Registry stats: {registry.get_stats()}")

        # A few rolls against a fresh humanoid to show the derived state
        db.creatures.create(Creature(id=DEMO_CREATURE, name="Training Target"))
        set_anatomy(db, registry, DEMO_CREATURE, "humanoid")
        rng = init_rng(settings.rng_seed)
        for _ in range(5):
            result = perform_hit(db, DEMO_CREATURE, 6.5, rng=rng)
            print(f"hit -> {result.target_part:<12} {result.body_part.current_hp:>3}/{result.body_part.max_hp} hp")

        state = derive_body_state(db.creatures.get_model(DEMO_CREATURE))
        print(f"{state.current_hp}/{state.max_hp} hp ({state.health_percentage}%) - {state.status}")


if __name__ == "__main__":
    load_dotenv()
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    run(settings)
