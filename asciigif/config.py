"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Conversion and playback defaults."""

    # Conversion
    OUTPUT_WIDTH: int = 80  # Characters per row
    ALPHA_THRESHOLD: int = 16  # Pixels with lower alpha render as blank
    RESTORE_PREVIOUS: bool = False  # True previous-frame restoration for disposal 3

    # Playback
    FPS: float = 12.0

    model_config = {"env_prefix": "ASCIIGIF_"}


settings = Settings()
