from dataclasses import dataclass
from typing import Optional

from core.config_loader import AppConfig
from core.matcher import CatalogValidator, MatchingService
from core.aggregation import (
    ShardRouter,
    ShardStore,
    RedisShardStore,
    AggregationCache,
    ResultRecorder,
)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Built once per process. The aggregation cache it holds is the
    process-local snapshot shared read-only by concurrent requests. Catalog
    access is obtained per request via a database session.
    """
    config: AppConfig
    validator: CatalogValidator
    matching_service: MatchingService
    router: ShardRouter
    store: ShardStore
    cache: AggregationCache
    recorder: ResultRecorder

    @classmethod
    def build(cls, config: AppConfig, store: Optional[ShardStore] = None) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            store: Shard store to use instead of the configured Redis store

        Returns:
            Fully wired AppContext instance
        """
        validator = CatalogValidator(config.matching.embedding_dimensions)
        matching_service = MatchingService(validator=validator)

        router = ShardRouter(
            logical_key=config.aggregation.logical_key,
            shard_count=config.aggregation.shard_count
        )
        store = store or cls._build_store(config)

        cache = AggregationCache(
            store=store,
            router=router,
            ttl_seconds=config.aggregation.cache_ttl_seconds
        )
        recorder = ResultRecorder(
            store=store,
            router=router,
            max_workers=config.aggregation.recorder_workers,
            max_pending=config.aggregation.recorder_max_pending
        )

        return cls(
            config=config,
            validator=validator,
            matching_service=matching_service,
            router=router,
            store=store,
            cache=cache,
            recorder=recorder
        )

    @staticmethod
    def _build_store(config: AppConfig) -> RedisShardStore:
        """Build the Redis shard store from configuration."""
        redis_config = config.redis
        return RedisShardStore(
            redis_url=redis_config.url,
            password=redis_config.password,
            key_prefix=redis_config.key_prefix,
            socket_timeout=redis_config.socket_timeout_seconds
        )

    def close(self) -> None:
        """Finish running match writes and abandon queued ones before the process exits."""
        self.recorder.shutdown(wait=True, cancel_pending=True)
