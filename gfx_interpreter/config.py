"""Application configuration from environment variables."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Storage path of the shared image shown when a placeholder can't be resolved
PLACEHOLDER_PATH = "do-no-delete/placeholder.png"


class Settings(BaseSettings):
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GFX_GEMINI_API_KEY", "GEMINI_API_KEY"),
    )
    gemini_image_model: str = "gemini-2.5-flash-image"

    # Object storage + texture cache (Supabase REST)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    textures_bucket: str = "Texures"  # bucket name is misspelled upstream
    fallback_image_url: str = "https://placehold.co/1280x720/png"

    # Timeouts in seconds
    generation_timeout: float = 60.0
    thumbnail_timeout: float = 5.0
    cache_lookup_timeout: float = 5.0

    log_level: str = "info"
    debug_dir: str | None = None

    host: str = "0.0.0.0"
    port: int = 8002

    model_config = SettingsConfigDict(
        env_prefix="GFX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def storage_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)

    @property
    def placeholder_url(self) -> str:
        """URL substituted for any image that fails to resolve."""
        if self.supabase_url:
            base = self.supabase_url.rstrip("/")
            return f"{base}/storage/v1/object/public/{self.textures_bucket}/{PLACEHOLDER_PATH}"
        return self.fallback_image_url


settings = Settings()
