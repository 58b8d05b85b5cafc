#!/usr/bin/env python3
"""
Shard Router - Spreads one logical counter over N physical records.

Writes pick exactly one shard so no single record becomes a hot partition;
reads enumerate every shard. Shards are logical-event slots and carry no
relationship to candidate identity.
"""

import hashlib
import random
from typing import List, Optional

DEFAULT_LOGICAL_KEY = "global"
DEFAULT_SHARD_COUNT = 100


class ShardRouter:
    """Maps the logical key onto `{logical_key}-0 .. {logical_key}-(N-1)`."""

    def __init__(
        self,
        logical_key: str = DEFAULT_LOGICAL_KEY,
        shard_count: int = DEFAULT_SHARD_COUNT,
        rng: Optional[random.Random] = None
    ):
        if shard_count < 1:
            raise ValueError(f"shard_count must be positive, got {shard_count}")
        self.logical_key = logical_key
        self.shard_count = shard_count
        self._rng = rng or random.Random()

    def shard_key(self, index: int) -> str:
        if not 0 <= index < self.shard_count:
            raise IndexError(f"Shard index {index} out of range [0, {self.shard_count})")
        return f"{self.logical_key}-{index}"

    def all_shard_keys(self) -> List[str]:
        """All shard keys in index order (used for full reads)."""
        return [self.shard_key(i) for i in range(self.shard_count)]

    def write_shard_for(self, event_id: Optional[str] = None) -> str:
        """Pick the single shard a write goes to.

        Uniformly random by default. With an event-local identifier (e.g. a
        request ID) the choice is a stable hash of that identifier instead.
        """
        if event_id:
            digest = hashlib.sha256(event_id.encode('utf-8')).digest()
            index = int.from_bytes(digest[:8], 'big') % self.shard_count
        else:
            index = self._rng.randrange(self.shard_count)
        return self.shard_key(index)
