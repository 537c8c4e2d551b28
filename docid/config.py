# docid/config.py
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import MIN_ID_LENGTH


class Settings(BaseSettings):
    """Defaults for the ``docid`` command line, read from DOCID_* environment variables or .env."""

    MIN_ID_LENGTH: int = Field(default=MIN_ID_LENGTH, ge=1, description="Target length of generated IDs.")

    MAX_MEAN_FREQUENCY: float | None = Field(
        default=None,
        ge=0,
        description="Highest mean document frequency of the words in an ID. Unset uses the corpus mean.",
    )

    CACHE_SUFFIX: str = Field(
        default="_doc_word_count.csv",
        description="Suffix replacing '.json' on the input path to name the word frequency cache.",
    )

    OUTPUT_SUFFIX: str = Field(
        default="_IDs.json",
        description="Suffix replacing '.json' on the input path to name the ID output.",
    )

    model_config = SettingsConfigDict(env_prefix="DOCID_", env_file=".env", env_file_encoding="utf-8", extra="ignore")
