"""Configuration management for Slop Score."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SLOP_SCORE_",
    )

    # Corpus files
    data_dir: Path = Field(default=Path("data"))
    wordfreq_file: str = Field(default="large_en.msgpack.gz")
    human_profile_file: str = Field(default="human_writing_profile.json.gz")
    slop_words_file: str = Field(default="slop_list.json")
    slop_trigrams_file: str = Field(default="slop_list_trigrams.json")

    # POS tagging
    spacy_model: str = Field(default="en_core_web_sm")
    use_pos_tagger: bool = Field(default=True)

    # Analysis settings
    mattr_window: int = Field(default=500, ge=1)
    overuse_top_k: int = Field(default=40, ge=1, description="N-gram rows used for repetition score")
    max_contrast_matches: int = Field(default=100, ge=0)
    max_over_represented: int = Field(default=100, ge=0)

    @property
    def wordfreq_path(self) -> Path:
        return self.data_dir / self.wordfreq_file

    @property
    def human_profile_path(self) -> Path:
        return self.data_dir / self.human_profile_file

    @property
    def slop_words_path(self) -> Path:
        return self.data_dir / self.slop_words_file

    @property
    def slop_trigrams_path(self) -> Path:
        return self.data_dir / self.slop_trigrams_file


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
