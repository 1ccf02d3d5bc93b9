from .object_storage import ObjectStorage, get_storage

__all__ = ["ObjectStorage", "get_storage"]
