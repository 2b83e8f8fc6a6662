# utils/cache.py
import threading
from typing import Any, Dict, Iterable, Optional, Set


class TaggedCache:
    """Process-wide key/value store without expiry.

    Entries live until one of their tags is invalidated. Each tag carries a
    generation that moves on every invalidation; a value computed under an
    older generation is not stored. Streamlit serves sessions from several
    threads, hence the lock.
    """

    def __init__(self):
        self._data: Dict[str, Any] = {}
        self._tags: Dict[str, Set[str]] = {}
        self._generations: Dict[str, int] = {}
        self._lock = threading.Lock()

    def get(self, cid: str) -> Optional[Any]:
        with self._lock:
            return self._data.get(cid)

    def generation(self, tag: str) -> int:
        with self._lock:
            return self._generations.get(tag, 0)

    def set(self, cid: str, value: Any, tags: Iterable[str] = (),
            generation: Optional[int] = None) -> bool:
        """Store a value; returns False when a tag moved past ``generation``."""
        tags = list(tags)
        with self._lock:
            if generation is not None and any(
                self._generations.get(tag, 0) != generation for tag in tags
            ):
                return False
            self._data[cid] = value
            for tag in tags:
                self._tags.setdefault(tag, set()).add(cid)
            return True

    def invalidate_tags(self, tags: Iterable[str]) -> None:
        with self._lock:
            for tag in tags:
                self._generations[tag] = self._generations.get(tag, 0) + 1
                for cid in self._tags.pop(tag, set()):
                    self._data.pop(cid, None)

    def __contains__(self, cid: str) -> bool:
        with self._lock:
            return cid in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
