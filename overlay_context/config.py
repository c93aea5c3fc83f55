"""
Overlay Context Configuration
Environment-driven settings for rendering contextualized controls
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Rendering settings for overlay code listings"""

    # Profile banner drawn above each layer of full_code
    banner_char: str = Field(default="=", description="Character used for banner rules")
    banner_width: int = Field(default=57, description="Number of characters per banner rule")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="OVERLAY_CONTEXT_",
        extra="ignore",
    )

    @field_validator("banner_char")
    @classmethod
    def banner_char_must_be_single(cls, v):
        if len(v) != 1:
            raise ValueError("Banner character must be exactly one character")
        return v

    @field_validator("banner_width")
    @classmethod
    def banner_width_must_be_positive(cls, v):
        if v < 1:
            raise ValueError("Banner width must be at least 1")
        return v

    @property
    def banner_rule(self) -> str:
        return self.banner_char * self.banner_width


@lru_cache()
def get_settings() -> Settings:
    """Get cached overlay context settings"""
    return Settings()
