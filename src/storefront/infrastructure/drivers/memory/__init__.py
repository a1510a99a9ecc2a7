from storefront.infrastructure.drivers.memory.in_memory_data_store import InMemoryDataStore

__all__ = ["InMemoryDataStore"]
