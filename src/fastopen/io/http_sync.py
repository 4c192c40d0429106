"""HTTP(S) sources using requests."""

import logging
from typing import Optional

import requests

from ..core import config
from .base import HTTPStatusError, RawSource

logger = logging.getLogger(__name__)

# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


def open_http_source(url: str, session: Optional[requests.Session] = None,
                     timeout: Optional[float] = None) -> RawSource:
    """Issue a streaming GET and expose the response body as a raw source.

    Anything but a 200 answer fails here, before any byte of the body is read.
    """
    session = session if session is not None else _get_session()
    if timeout is None:
        timeout = config.HTTP_TIMEOUT

    try:
        response = session.get(url, stream=True, timeout=timeout)
    except requests.RequestException as e:
        raise IOError(f"GET request failed for {url}: {e}") from e

    if response.status_code != 200:
        response.close()
        raise HTTPStatusError(url, response.status_code, response.reason)

    logger.debug("GET %s -> %d", url, response.status_code)
    # undo any Content-Encoding applied in transit; the payload itself is sniffed later
    response.raw.decode_content = True
    return RawSource(response.raw, name=url, must_close=True, closer=response.close)


def close_global_session():
    """Close the global requests session. Call this at application shutdown."""
    global _session
    if _session is not None:
        _session.close()
        _session = None
