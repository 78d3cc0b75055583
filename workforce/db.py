from fastapi import Request

from .storage.memory_provider import MemStorage
from .storage.provider import StorageProvider


def create_store(seed: bool = True) -> StorageProvider:
    store = MemStorage()
    if seed:
        from .storage.seed import load_demo_data
        load_demo_data(store)
    return store


def get_store(request: Request) -> StorageProvider:
    # One store per application instance, created at startup
    return request.app.state.store
