"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    svgscene_env: str = "development"
    svgscene_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Interpreter defaults
    default_canvas_size: float = 100.0
    density: float = 1.0

    # Request guard for the HTTP surface
    max_svg_bytes: int = 5_000_000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
