"""Cache-busting version tokens for mutable remote images.

Logo and product-image URLs keep a stable path when the file behind
them is replaced, so the displayed URL carries a ``v`` query parameter
that changes whenever the entity is edited, a refresh is requested or
the surrounding list is reloaded.  Tokens only ever grow.
"""

from __future__ import annotations

import itertools
from typing import Dict, Optional

import httpx

VERSION_PARAM = "v"


class ImageVersions:
    """Per-entity image version tokens for one domain."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._floor = 0
        self._generation = 0
        self._versions: Dict[int, int] = {}

    @property
    def generation(self) -> int:
        """Last token handed out; changes whenever any URL would change."""
        return self._generation

    def token(self, entity_id: int) -> int:
        return max(self._versions.get(entity_id, 0), self._floor)

    def bump(self, entity_id: int) -> int:
        """Entity edited: only its own token moves."""
        self._generation = self._versions[entity_id] = next(self._counter)
        return self._generation

    def bump_all(self) -> int:
        """Refresh requested or list reloaded: every token moves."""
        self._generation = self._floor = next(self._counter)
        return self._generation

    def url_for(self, url: Optional[str], entity_id: int) -> Optional[str]:
        """``url`` with the entity's version token merged into its query."""
        if not url:
            return url
        versioned = httpx.URL(url).copy_merge_params({VERSION_PARAM: str(self.token(entity_id))})
        return str(versioned)
