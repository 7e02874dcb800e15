"""Server-side product telemetry via PostHog.

Every method is a no-op unless PostHog is enabled and an API key is set.
"""

import logging
from typing import Any

import posthog

from winejournal.config import settings

logger = logging.getLogger(__name__)


class PostHogService:
    """Lazily configured PostHog client."""

    def __init__(self) -> None:
        self._client: Any = None
        self._initialized = False

    def is_available(self) -> bool:
        return settings.posthog_enabled and bool(settings.posthog_api_key)

    def _ensure_initialized(self) -> bool:
        if self._initialized:
            return self._client is not None
        self._initialized = True

        if not self.is_available():
            logger.debug("PostHog telemetry disabled or not configured")
            return False

        posthog.project_api_key = settings.posthog_api_key
        posthog.host = settings.posthog_host
        posthog.debug = settings.posthog_debug
        self._client = posthog
        logger.info("PostHog telemetry initialized (host=%s)", settings.posthog_host)
        return True

    def capture(
        self,
        distinct_id: str,
        event: str,
        properties: dict[str, Any] | None = None,
    ) -> None:
        """Record an event such as ``wine_logged`` for a user."""
        if not self._ensure_initialized():
            return
        try:
            self._client.capture(distinct_id=distinct_id, event=event, properties=properties or {})
        except Exception as e:
            logger.error("Failed to capture PostHog event %s: %s", event, e)

    def identify(self, distinct_id: str, properties: dict[str, Any] | None = None) -> None:
        if not self._ensure_initialized():
            return
        try:
            self._client.set(distinct_id=distinct_id, properties=properties or {})
        except Exception as e:
            logger.error("Failed to identify PostHog user: %s", e)

    def shutdown(self) -> None:
        """Flush queued events; called from the application lifespan."""
        if self._client is None:
            return
        try:
            self._client.flush()
            self._client.shutdown()
            logger.info("PostHog client shutdown complete")
        except Exception as e:
            logger.error("Error during PostHog shutdown: %s", e)

    def reset(self) -> None:
        self._client = None
        self._initialized = False


posthog_service = PostHogService()
