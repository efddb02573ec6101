"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Discord
    discord_bot_token: str = ""
    discord_guild_id: str = ""

    # Google service account
    google_service_account_email: str = ""
    google_service_account_key: str = ""

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080

    @property
    def google_private_key(self) -> str:
        """Service account key with literal ``\\n`` sequences turned into newlines.

        Keys pasted into .env files usually arrive on a single line.
        """
        return self.google_service_account_key.replace("\\n", "\n")

    def missing_required(self) -> list[str]:
        """Return the names of required settings that are unset."""
        required = {
            "DISCORD_BOT_TOKEN": self.discord_bot_token,
            "DISCORD_GUILD_ID": self.discord_guild_id,
            "GOOGLE_SERVICE_ACCOUNT_EMAIL": self.google_service_account_email,
            "GOOGLE_SERVICE_ACCOUNT_KEY": self.google_service_account_key,
        }
        return [name for name, value in required.items() if not value]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
