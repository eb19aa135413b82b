import logging
from typing import Optional

import httpx


logger = logging.getLogger(__name__)


class LinkChecker:
    """Basic reachability probe for a URL; tries HEAD, falls back to GET."""

    def __init__(self, timeout: float = 5.0, transport: Optional[httpx.BaseTransport] = None):
        self.timeout = httpx.Timeout(timeout, connect=timeout)
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, follow_redirects=True, transport=self.transport)

    def check(self, url: str) -> dict:
        status = None
        ok = False
        try:
            with self._client() as client:
                r = client.head(url)
                status = r.status_code
                ok = 200 <= status < 400
                if not ok:
                    r = client.get(url)
                    status = r.status_code
                    ok = 200 <= status < 400
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.info("Link check failed for %s: %s", url, type(exc).__name__)
            status = None
            ok = False
        return {"ok": ok, "status": status}
