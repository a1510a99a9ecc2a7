from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront.infrastructure.configuration.app_settings import AppSettings, DataBackend
from storefront.infrastructure.configuration.supabase_settings import SupabaseSettings


class Settings(BaseSettings):
    """Master configuration combining all sub-settings."""

    app: AppSettings = Field(default_factory=AppSettings)
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)

    def validate_backend(self) -> None:
        if self.app.data_backend == DataBackend.POSTGREST:
            self.supabase.validate_credentials()

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
