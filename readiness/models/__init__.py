from .kv_blob import KeyValueBlob

__all__ = [
    "KeyValueBlob",
]
