"""
AgentDesk Backend - External Lookup Service ("say")
=====================================================

What:  Forwards a keyword to the external lookup API and returns its JSON body.
How:   One GET request per lookup through httpx.AsyncClient with a bounded
       timeout; the keyword is sent as a URL-encoded `keyword` query parameter.
Who:   Called by GET /lambdas/say (routes/lambdas.py).

Failure Handling:
    Every outbound failure (connect error, timeout or non-2xx status) becomes
    LookupServiceError carrying the underlying error text. A 2xx body that is
    not JSON is relayed as text. Lookups are single-attempt; there is no retry.
"""

import logging
import time
from typing import Any, Optional

import httpx

from agentdesk.config import settings
from agentdesk.exceptions import LookupRequestError, LookupServiceError

logger = logging.getLogger(__name__)


class LookupService:
    """
    Client for the external keyword lookup endpoint.

    Args:
        api_url: Endpoint receiving ?keyword=... (defaults to LOOKUP_API_URL)
        timeout: Seconds allowed for the whole call (defaults to LOOKUP_TIMEOUT_SECONDS)
        transport: Optional httpx transport; tests pass httpx.MockTransport
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url or settings.lookup_api_url
        self.timeout = timeout if timeout is not None else settings.lookup_timeout_seconds
        self.transport = transport

    async def say(self, keyword: Optional[str]) -> Any:
        """
        Look up `keyword` and return the decoded JSON response body.

        Raises:
            LookupRequestError: keyword is missing or empty (→ 400)
            LookupServiceError: the remote call failed in any way (→ 500)
        """
        if not keyword:
            raise LookupRequestError()

        start_time = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self.transport,
            ) as client:
                response = await client.get(self.api_url, params={"keyword": keyword})
                response.raise_for_status()
        except httpx.HTTPError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.warning(
                "Lookup for keyword %r failed after %.0fms: %s",
                keyword,
                duration_ms,
                str(e),
            )
            raise LookupServiceError(
                detail=str(e) or type(e).__name__,
                context={"error_type": type(e).__name__},
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info("Lookup for keyword %r completed in %.0fms", keyword, duration_ms)

        try:
            return response.json()
        except ValueError:
            # Plain-text bodies are relayed as a JSON string
            return response.text


lookup_service = LookupService()


def get_lookup_service() -> LookupService:
    """FastAPI dependency returning the shared LookupService."""
    return lookup_service
