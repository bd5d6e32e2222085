"""
HTTP collaborator - sends a ResolvedRequest and returns the decoded body.

No retries: a failed call is reported once as TransportError.
"""
import logging

import requests

from request_mcp import __version__
from request_mcp.config import DEFAULT_TIMEOUT
from request_mcp.errors import TransportError

log = logging.getLogger(__name__)

USER_AGENT = f"request-mcp/{__version__}"
OK_STATUS = range(200, 300)


class HttpClient:
    def __init__(self, timeout=DEFAULT_TIMEOUT, session=None):
        self.timeout = timeout
        self._session = session

    def get_session(self) -> requests.Session:
        """Get or create reusable session with connection pooling."""
        if self._session is None:
            self._session = requests.Session()
            adapter = requests.adapters.HTTPAdapter(pool_connections=10, pool_maxsize=20, max_retries=0)
            self._session.mount("https://", adapter)
            self._session.mount("http://", adapter)
            self._session.headers["User-Agent"] = USER_AGENT
        return self._session

    def send(self, request):
        """Dispatch the request. Returns parsed JSON, or text if the body isn't JSON."""
        log.debug("%s %s", request.method, request.url)
        try:
            r = self.get_session().request(
                request.method,
                request.url,
                headers=request.headers or None,
                data=request.body.encode("utf-8") if request.body is not None else None,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

        if r.status_code not in OK_STATUS:
            raise TransportError(f"HTTP {r.status_code}: {r.text[:500]}")

        if not r.content:
            return None
        try:
            return r.json()
        except ValueError:
            return r.text

    def close(self):
        if self._session is not None:
            self._session.close()
            self._session = None
