from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront.core.exceptions.configuration_error import ConfigurationError


class SupabaseSettings(BaseSettings):
    """Connection settings for the managed data service (PostgREST + GoTrue)."""

    url: str | None = Field(default=None, description="Project base URL")
    anon_key: SecretStr | None = Field(default=None)
    service_key: SecretStr | None = Field(default=None, description="Service role key used for server-side writes")
    timeout_seconds: float = Field(default=10.0, gt=0)

    def validate_credentials(self) -> None:
        if not self.url:
            raise ConfigurationError("SUPABASE_URL is required for the postgrest backend.")
        if not self.anon_key:
            raise ConfigurationError("SUPABASE_ANON_KEY is required for the postgrest backend.")
        if not self.service_key:
            raise ConfigurationError("SUPABASE_SERVICE_KEY is required for the postgrest backend.")

    model_config = SettingsConfigDict(
        env_prefix="SUPABASE_",
        case_sensitive=False,
        extra="ignore",
    )
