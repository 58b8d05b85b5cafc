"""Shard Store - Redis-backed sharded match counters."""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence
from datetime import datetime, timezone
from urllib.parse import urlparse

from redis import Redis
from redis.exceptions import RedisError

from core.aggregation.models import AggregatedStats

logger = logging.getLogger(__name__)

TOTAL_MATCHES_FIELD = "totalMatches"
TOTAL_QUESTIONS_FIELD = "totalQuestions"
LAST_UPDATED_FIELD = "lastUpdated"
CANDIDATE_FIELD_PREFIX = "candidate:"


class ShardStoreError(Exception):
    """Raised when the shard store cannot be read or written."""
    pass


def _sanitize_url(url: str) -> str:
    """Remove credentials from URL for safe logging."""
    try:
        parsed = urlparse(url)
        if parsed.password:
            sanitized = parsed._replace(
                netloc=f"{parsed.username or ''}:*@{parsed.hostname}:{parsed.port or 6379}"
            )
            return sanitized.geturl()
        return url
    except ValueError:
        return url


def _to_int(value: Optional[str], shard_key: str, field: str) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Shard {shard_key} has non-integer {field}={value!r}, counting as 0")
        return 0


def _to_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_shard(shard_key: str, fields: Dict[str, str]) -> AggregatedStats:
    """Build AggregatedStats from the flat hash stored for one shard."""
    candidate_stats = {
        name[len(CANDIDATE_FIELD_PREFIX):]: _to_int(value, shard_key, name)
        for name, value in fields.items()
        if name.startswith(CANDIDATE_FIELD_PREFIX)
    }
    return AggregatedStats(
        stats_id=shard_key,
        total_matches=_to_int(fields.get(TOTAL_MATCHES_FIELD), shard_key, TOTAL_MATCHES_FIELD),
        total_questions=_to_int(fields.get(TOTAL_QUESTIONS_FIELD), shard_key, TOTAL_QUESTIONS_FIELD),
        candidate_stats=candidate_stats,
        last_updated=_to_datetime(fields.get(LAST_UPDATED_FIELD)),
    )


class ShardStore(ABC):
    """Counter store the aggregation engine reads from and writes to."""

    @abstractmethod
    def batch_get(self, shard_keys: Sequence[str]) -> Dict[str, AggregatedStats]:
        """Fetch shards in one batched read.

        Returns only shards that exist; keys that were never written are
        omitted rather than reported as errors.
        """

    @abstractmethod
    def increment(
        self,
        shard_key: str,
        candidate_id: str,
        questions_answered: int,
        timestamp: datetime
    ) -> None:
        """Atomically add one match to a shard."""


class RedisShardStore(ShardStore):
    """
    Shard store keeping one Redis hash per shard.

    Hash layout for `{key_prefix}:{shard_key}`:
        totalMatches, totalQuestions   integer counters (HINCRBY)
        candidate:<candidate_id>       integer counter per top-matched candidate
        lastUpdated                    ISO-8601 timestamp of the latest write

    Increments run as a MULTI/EXEC pipeline of HINCRBYs, so concurrent writes
    to the same shard never lose updates. Reads pipeline one HGETALL per shard.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        password: Optional[str] = None,
        key_prefix: str = "stats",
        socket_timeout: float = 2.0,
        client: Optional[Redis] = None
    ):
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        if client is not None:
            self._redis = client
        else:
            self._redis = Redis.from_url(
                redis_url,
                password=password,
                decode_responses=True,
                socket_connect_timeout=socket_timeout,
                socket_timeout=socket_timeout
            )
            logger.info(f"Shard store configured for Redis at {_sanitize_url(redis_url)}")

    @property
    def is_available(self) -> bool:
        """Check if Redis answers a ping."""
        try:
            return bool(self._redis.ping())
        except RedisError:
            return False

    def _make_key(self, shard_key: str) -> str:
        return f"{self.key_prefix}:{shard_key}"

    def batch_get(self, shard_keys: Sequence[str]) -> Dict[str, AggregatedStats]:
        shard_keys = list(shard_keys)
        if not shard_keys:
            return {}

        try:
            pipe = self._redis.pipeline(transaction=False)
            for shard_key in shard_keys:
                pipe.hgetall(self._make_key(shard_key))
            rows = pipe.execute()
        except RedisError as e:
            raise ShardStoreError(f"Failed to read {len(shard_keys)} shards: {e}") from e

        shards = {
            shard_key: parse_shard(shard_key, fields)
            for shard_key, fields in zip(shard_keys, rows)
            if fields
        }
        logger.debug(f"Read {len(shards)}/{len(shard_keys)} existing shards")
        return shards

    def increment(
        self,
        shard_key: str,
        candidate_id: str,
        questions_answered: int,
        timestamp: datetime
    ) -> None:
        key = self._make_key(shard_key)
        try:
            pipe = self._redis.pipeline(transaction=True)
            pipe.hincrby(key, TOTAL_MATCHES_FIELD, 1)
            pipe.hincrby(key, TOTAL_QUESTIONS_FIELD, questions_answered)
            pipe.hincrby(key, f"{CANDIDATE_FIELD_PREFIX}{candidate_id}", 1)
            pipe.hset(key, LAST_UPDATED_FIELD, timestamp.isoformat())
            pipe.execute()
        except RedisError as e:
            raise ShardStoreError(f"Failed to increment shard {shard_key}: {e}") from e
