"""Configuration management for d20stats using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="D20STATS_",
        extra="ignore",
    )

    # Rule data
    rules_dir: Path | None = Field(
        default=None,
        description="Directory with races.yaml, classes.yaml and tables.yaml (None = bundled SRD data)",
    )

    # Validation
    ability_score_min: int = Field(default=3, description="Lowest ability score for mortal play")
    ability_score_max: int = Field(
        default=25, description="Highest ability score for mortal play (not enforced past level 20)"
    )

    # Epic progression
    epic_level_cap: int = Field(default=100, description="Highest character level reachable")

    # Orchestrator
    result_cache_enabled: bool = Field(
        default=True, description="Keep the last computed snapshot for repeated reads"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format (console or json)")

    @property
    def bundled_rules_dir(self) -> Path:
        """Get the directory of the rule data shipped with the package."""
        return Path(__file__).parent / "rules" / "data"

    @property
    def effective_rules_dir(self) -> Path:
        """Get the rule data directory that should be loaded."""
        return self.rules_dir if self.rules_dir is not None else self.bundled_rules_dir


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
