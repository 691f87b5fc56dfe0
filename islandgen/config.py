"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Terrain tool settings pulled from ISLANDGEN_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ISLANDGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Logging format (console or json)")

    # Generation
    seed_text: str = Field(default="island", description="Text hashed into the RNG seed")
    num_points: int = Field(default=8000, description="Number of Voronoi cells to generate")
    num_lloyd_iterations: int = Field(default=2, description="Lloyd relaxation passes")
    box_size: float = Field(default=500.0, description="Side length of the map square")

    # Export
    output_path: str = Field(default="map.png", description="Where the heightmap image is written")


def get_settings() -> Settings:
    """Load settings from the environment."""
    return Settings()
