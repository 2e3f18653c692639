"""
HTTP request helpers for URL imports and remote SPARQL endpoints.

This module provides HTTP request utilities with consistent timeout
handling and translation of transport failures into NetworkError.

Classes:
    RequestHandler: Centralized HTTP request handling with error handling
"""

import logging
from typing import Any, Dict, Literal, Optional, Tuple, Union
from urllib.parse import urlparse

import requests

from ..exceptions import NetworkError

logger = logging.getLogger(__name__)

# Type aliases
HttpMethod = Literal["GET", "POST"]
Timeout = Union[float, Tuple[float, Optional[float]]]


def hostname_of(url: str) -> str:
    """Return the hostname part of a URL, or the URL itself if it has none."""
    return urlparse(url).hostname or url


class RequestHandler:
    """Centralized HTTP request handling with error handling.

    Handles common request patterns including:
    - Connect/read timeout handling
    - Connection error handling, naming the unreachable host
    - HTTP error status handling
    - Consistent logging format

    The session is owned by the caller, who decides when its connections
    are released.

    Example:
        >>> with requests.Session() as session:
        ...     handler = RequestHandler(session, timeout=(5.0, 30.0))
        ...     response = handler.execute("GET", url, "Import RDF")
    """

    def __init__(
        self,
        session: requests.Session,
        timeout: Timeout,
    ):
        """Initialize the request handler.

        Args:
            session: Session used for all requests
            timeout: requests-style timeout, either seconds or a
                (connect, read) tuple where read may be None
        """
        self._session = session
        self._timeout = timeout

    def execute(
        self,
        method: HttpMethod,
        url: str,
        operation_name: str,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any
    ) -> requests.Response:
        """Execute an HTTP request and check its status.

        Args:
            method: HTTP method (GET, POST)
            url: URL to request
            operation_name: Description of operation (for logging)
            headers: Request headers
            **kwargs: Additional arguments to pass to requests

        Returns:
            Response object with a 2xx status

        Raises:
            NetworkError: On any transport failure or error status
        """
        host = hostname_of(url)

        try:
            logger.debug(f"{operation_name}: {method} {url}")
            response = self._session.request(
                method, url, headers=headers, timeout=self._timeout, **kwargs
            )

        except requests.exceptions.Timeout as e:
            logger.error(f"{operation_name}: Request to {host} timed out after {self._timeout}s")
            raise NetworkError(
                f"Timed out while contacting host: {host}", host=host, url=url
            ) from e

        except requests.exceptions.ConnectionError as e:
            logger.error(f"{operation_name}: Connection error: {e}")
            raise NetworkError(
                f"Unknown or unresponsive host: {host}", host=host, url=url
            ) from e

        except requests.exceptions.RequestException as e:
            logger.error(f"{operation_name}: Request error: {e}")
            raise NetworkError(
                f"{operation_name} request to {host} failed: {e}", host=host, url=url
            ) from e

        if not response.ok:
            status_code = response.status_code
            response.close()
            logger.error(f"{operation_name}: HTTP {status_code} from {host}")
            raise NetworkError(
                f"{operation_name} failed: HTTP {status_code} from {host}",
                host=host,
                url=url,
                status_code=status_code,
            )

        return response
