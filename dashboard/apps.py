import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class DashboardConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'dashboard'
    verbose_name = 'Villa dashboard'

    def ready(self):
        """
        Connect signal handlers and probe the caches
        """
        from . import signals  # noqa: F401

        for alias in ('default', 'session'):
            self.check_cache(alias)

    def check_cache(self, alias):
        """
        Write and read back a probe key on one cache alias

        Failures are logged, not raised.
        """
        from django.core.cache import caches
        from redis.exceptions import RedisError

        probe_key = 'dashboard_cache_probe'
        try:
            backend = caches[alias]
            backend.set(probe_key, 'ok', 10)
            if backend.get(probe_key) == 'ok':
                logger.info(f"Cache '{alias}' is reachable")
            else:
                logger.warning(f"Cache '{alias}' returned an unexpected probe value")
            backend.delete(probe_key)
        except RedisError as e:
            logger.error(f"Cache '{alias}' check failed: {e}")
