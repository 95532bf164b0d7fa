"""Append-only asset registry keyed by deterministic placeholder tokens."""

from __future__ import annotations

import hashlib
import re
from typing import Callable, Dict, Iterator, List, Optional, TypeVar

from ..models import AssetEntry

_T = TypeVar("_T")

TOKEN_PREFIX = "@@asset-"
TOKEN_SUFFIX = "@@"


class PlaceholderTable:
    """Memoizes placeholder tokens for one compilation run.

    Tokens are a BLAKE2b digest of the origin string. Collisions are not
    detected: two origins sharing a digest would share a registry slot.
    """

    def __init__(self) -> None:
        self._tokens: Dict[str, str] = {}

    def token_for(self, origin: str) -> str:
        token = self._tokens.get(origin)
        if token is None:
            digest = hashlib.blake2b(origin.encode("utf-8"), digest_size=8).hexdigest()
            token = f"{TOKEN_PREFIX}{digest}{TOKEN_SUFFIX}"
            self._tokens[origin] = token
        return token

    def __len__(self) -> int:
        return len(self._tokens)


class AssetRegistry:
    """Ordered table of asset entries, mirrored into an optional master registry."""

    def __init__(
        self,
        placeholders: PlaceholderTable | None = None,
        *,
        master: "AssetRegistry | None" = None,
    ) -> None:
        if placeholders is None:
            placeholders = master.placeholders if master is not None else PlaceholderTable()
        self.placeholders = placeholders
        self.master = master
        self._entries: Dict[str, AssetEntry] = {}

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def root(self) -> "AssetRegistry":
        """Return the top of the master chain."""
        registry = self
        while registry.master is not None:
            registry = registry.master
        return registry

    def register(self, origin: str, source: str | None = None) -> str:
        """Record ``origin`` and return its placeholder token.

        Registering the same origin again replaces the stored entry under the
        same token, so the token identity never changes.
        """
        token = self.placeholders.token_for(origin)
        entry = AssetEntry(
            source=source or origin,
            token=token,
            pattern=re.compile(re.escape(token)),
            is_master=self.master is None,
        )
        self._store(token, entry)
        return token

    def get(self, token: str) -> Optional[AssetEntry]:
        return self._entries.get(token)

    def for_each(self, fn: Callable[[AssetEntry, str, "AssetRegistry"], None]) -> None:
        for token, entry in list(self._entries.items()):
            fn(entry, token, self)

    def map(self, fn: Callable[[AssetEntry, str, "AssetRegistry"], _T]) -> List[_T]:
        return [fn(entry, token, self) for token, entry in list(self._entries.items())]

    def _store(self, token: str, entry: AssetEntry) -> None:
        if self.master is not None:
            self.master._store(token, entry)
        self._entries[token] = entry

    def __iter__(self) -> Iterator[AssetEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, token: object) -> bool:
        return token in self._entries


__all__ = ["AssetRegistry", "PlaceholderTable", "TOKEN_PREFIX", "TOKEN_SUFFIX"]
