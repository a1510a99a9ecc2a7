from decimal import Decimal

import pytest

from storefront.core.application.policies import ReviewPolicy
from storefront.core.exceptions import ConfigurationError
from storefront.infrastructure.configuration import AppSettings, DataBackend, Settings, SupabaseSettings


class TestAppSettings:
    def test_defaults(self, monkeypatch):
        for name in ("STOREFRONT_TAX_RATE", "STOREFRONT_DATA_BACKEND", "STOREFRONT_RETURN_WINDOW_DAYS"):
            monkeypatch.delenv(name, raising=False)

        settings = AppSettings()

        assert settings.tax_rate == Decimal("0.10")
        assert settings.return_window_days == 30
        assert settings.data_backend is DataBackend.MEMORY

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_TAX_RATE", "0.19")
        monkeypatch.setenv("STOREFRONT_REVIEW_POLICY", "purchased_product")
        monkeypatch.setenv("STOREFRONT_FLAT_SHIPPING", "8000")

        settings = AppSettings()

        assert settings.tax_rate == Decimal("0.19")
        assert settings.review_policy is ReviewPolicy.PURCHASED_PRODUCT
        assert settings.flat_shipping == Decimal("8000")

    def test_invalid_tax_rate_rejected(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_TAX_RATE", "1.5")

        with pytest.raises(ValueError):
            AppSettings()


class TestBackendValidation:
    def test_postgrest_without_credentials(self):
        settings = Settings(
            app=AppSettings(data_backend=DataBackend.POSTGREST),
            supabase=SupabaseSettings(url=None, anon_key=None, service_key=None),
        )

        with pytest.raises(ConfigurationError):
            settings.validate_backend()

    def test_memory_backend_needs_nothing(self):
        Settings(
            app=AppSettings(data_backend=DataBackend.MEMORY),
            supabase=SupabaseSettings(url=None, anon_key=None, service_key=None),
        ).validate_backend()

    def test_supabase_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.test")
        monkeypatch.setenv("SUPABASE_SERVICE_KEY", "service-key")

        settings = SupabaseSettings()

        assert settings.url == "https://project.supabase.test"
        assert settings.service_key.get_secret_value() == "service-key"
