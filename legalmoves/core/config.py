"""Centralized application configuration.

All settings are read from environment variables (or a .env file), ex. HOST, PORT, LOG_LEVEL.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    # Output schema: every move object carries a `type` discriminator ("Normal", "EnPassant", "Castle", "Put")
    include_move_type: bool = True

    # Some FEN consumers accept positions where the side that just moved is in check (for analysis). We do not by default.
    reject_opponent_in_check: bool = True
