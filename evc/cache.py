import hashlib
from typing import Any, Dict, Optional

DEFAULT_NAMESPACE = "evc_template"


def fingerprint(source: str) -> str:
    return hashlib.md5(source.encode("utf-8")).hexdigest()


def cache_key(namespace: str, identifier: str, source: str) -> str:
    """`<namespace>:<template identifier>:<md5 of the raw source>`"""
    return f"{namespace}:{identifier}:{fingerprint(source)}"


class MemoryCache:
    """
    In-process cache store with the read/write/clear interface the template
    handler expects. Concurrent writers of the same key simply overwrite each
    other; compiled output for a key is always identical.
    """

    def __init__(self):
        self._data: Dict[str, Any] = {}

    def read(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def write(self, key: str, value: Any) -> None:
        self._data[key] = value

    def clear(self) -> None:
        self._data.clear()

    def stats(self) -> Dict[str, Any]:
        keys = list(self._data)
        return {"size": len(keys), "keys": keys}
