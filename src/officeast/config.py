"""Configuration management for the Office AST renderer."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Rendering
    default_delimiter: str = "\n"
    # Documents nested deeper than about 250 levels already fail validation
    # with a recursion error, so larger values have no effect
    max_depth: int = 128

    # Rendered-text cache
    cache_dir: Path = Path.home() / ".officeast"
    cache_version: str = "1.0"

    # Logging
    log_level: str = "INFO"

    @property
    def database_url(self) -> str:
        """SQLite URL for the rendered-text cache."""
        return f"sqlite:///{self.cache_dir / 'cache.db'}"

    class Config:
        env_prefix = "OFFICEAST_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
