from storefront.infrastructure.drivers.postgrest.postgrest_data_store import PostgrestDataStore

__all__ = ["PostgrestDataStore"]
