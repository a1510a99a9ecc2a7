from storefront.infrastructure.configuration.app_settings import AppSettings, DataBackend
from storefront.infrastructure.configuration.main_settings import Settings
from storefront.infrastructure.configuration.supabase_settings import SupabaseSettings

__all__ = ["AppSettings", "DataBackend", "Settings", "SupabaseSettings"]
