"""Election API settings.

Server address, SQLite file location, route prefix, CORS origins and log
level, read from the environment or a local `.env` file.  `create_app`
falls back to the module-level `settings` when no explicit `Settings` is
passed.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the election API server."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5006

    # SQLite storage (relative to the process working directory)
    DATABASE_PATH: str = "./db/election.db"
    DATABASE_ECHO: bool = False

    # Routing
    API_PREFIX: str = "/api"

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
