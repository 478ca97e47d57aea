from .storage_facade import AsyncStorageFacade, StorageFacade

__all__ = [
    "AsyncStorageFacade",
    "StorageFacade",
]
