import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from anatomy.templates.sources import BUILTIN_TEMPLATE_DIR


class Settings(BaseModel):
    db_path: str = Field("anatomy.db", description="SQLite file for creatures and templates.")
    template_dir: Path = Field(BUILTIN_TEMPLATE_DIR, description="Folder holding registry.json.")
    log_level: str = "INFO"
    rng_seed: Optional[int] = Field(None, description="Seed for reproducible hit rolls.")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ANATOMY_* environment variables (call load_dotenv() first)."""
        seed = os.environ.get("ANATOMY_RNG_SEED")
        return cls(
            db_path=os.environ.get("ANATOMY_DB_PATH", "anatomy.db"),
            template_dir=Path(os.environ.get("ANATOMY_TEMPLATE_DIR") or BUILTIN_TEMPLATE_DIR),
            log_level=os.environ.get("ANATOMY_LOG_LEVEL", "INFO").upper(),
            rng_seed=int(seed) if seed else None,
        )
