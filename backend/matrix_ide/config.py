"""Application configuration via environment variables."""
import random

from pydantic_settings import BaseSettings

from .engine.options import ExecutionOptions


class Settings(BaseSettings):
    app_name: str = "Matrix IDE"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000", "http://localhost:8080"]
    log_level: str = "INFO"

    # Cosmetic execution delays
    node_delay_ms: int = 100
    api_delay_min_ms: int = 200
    api_delay_max_ms: int = 500

    default_language: str = "python"
    snap_grid_size: float = 20.0
    max_results: int = 20

    model_config = {"env_prefix": "MATRIX_IDE_"}

    def execution_options(self, seed: int | None = None) -> ExecutionOptions:
        return ExecutionOptions(
            node_delay=self.node_delay_ms / 1000,
            api_delay=(self.api_delay_min_ms / 1000, self.api_delay_max_ms / 1000),
            rng=random.Random(seed),
        )


settings = Settings()
