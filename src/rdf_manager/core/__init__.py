"""HTTP transport shared by URL imports and remote queries."""

from .http_client import RequestHandler, hostname_of

__all__ = ["RequestHandler", "hostname_of"]
