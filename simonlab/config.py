from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    # Reproducibility
    global_seed: int = Field(default=1337)

    # Evaluation sizes
    roundtrip_vectors: int = Field(default=1000, ge=1)
    sac_trials: int = Field(default=200, ge=1)

    # Logging
    log_level: str = Field(default="INFO")

    # Paths
    project_root: str = Field(default=os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir)))
    runs_dir: str = Field(default="runs")

    @field_validator("log_level")
    @classmethod
    def _log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    return Settings(
        global_seed=int(os.getenv("SIMONLAB_SEED", "1337")),
        roundtrip_vectors=int(os.getenv("SIMONLAB_ROUNDTRIP_VECTORS", "1000")),
        sac_trials=int(os.getenv("SIMONLAB_SAC_TRIALS", "200")),
        log_level=os.getenv("SIMONLAB_LOG_LEVEL", "INFO"),
        runs_dir=os.getenv("SIMONLAB_RUNS_DIR", "runs"),
    )
