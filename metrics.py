"""
StatsD counters for endpoint hits.

Set up through ``init_app`` like the notifier. When ``STATSD_ENABLED`` is off
no client is built and every call is a no-op.
"""
from __future__ import annotations
import logging
from functools import wraps
from typing import Optional

from statsd import StatsClient

logger = logging.getLogger(__name__)


class StatsdMetrics:
    def __init__(self, app=None):
        self.client: Optional[StatsClient] = None
        self.enabled = False
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        self.enabled = bool(app.config.get("STATSD_ENABLED"))
        self.client = None
        if self.enabled:
            self.client = StatsClient(
                host=app.config.get("STATSD_HOST", "localhost"),
                port=int(app.config.get("STATSD_PORT", 8125)),
                prefix=app.config.get("STATSD_PREFIX") or None,
            )
            logger.info("statsd counters go to %s:%s",
                        app.config.get("STATSD_HOST"), app.config.get("STATSD_PORT"))
        app.extensions["statsd_metrics"] = self

    def incr(self, name: str, count: int = 1) -> None:
        if not self.enabled or self.client is None:
            return
        self.client.incr(name, count)

    def counted(self, name: str):
        """Count every request that reaches the wrapped view, whatever its outcome."""
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                self.incr(name)
                return view(*args, **kwargs)
            return wrapper
        return decorator
