"""
Exception types raised by the RDF manager.

Recoverable failures derive from RDFManagerError and keep the original
backend exception as ``__cause__``. BackendMismatchError is deliberately
outside that hierarchy: it signals caller misuse, not a transient state.
"""

from typing import Optional, Sequence


class RDFManagerError(Exception):
    """Base class for recoverable RDF manager errors.

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MalformedInputError(RDFManagerError):
    """Content does not parse under the declared serialization."""


class MalformedQueryError(MalformedInputError):
    """A SPARQL query text could not be parsed."""


class UnsupportedFormatError(RDFManagerError):
    """Serialization name is not one of the supported formats.

    Attributes:
        format_name: The rejected format name
        supported: The format names that would have been accepted
    """

    def __init__(self, format_name: Optional[str], supported: Sequence[str]):
        self.format_name = format_name
        self.supported = tuple(supported)
        quoted = [f'"{name}"' for name in self.supported]
        if len(quoted) > 1:
            listing = ", ".join(quoted[:-1]) + f" and {quoted[-1]}"
        else:
            listing = "".join(quoted)
        super().__init__(f"Unknown file format '{format_name}'. Supported are {listing}.")


class NetworkError(RDFManagerError):
    """Remote host could not be reached, or answered with an error.

    Attributes:
        host: Hostname of the target URL
        url: The full URL that was requested
        status_code: HTTP status code when the host answered with an error
    """

    def __init__(
        self,
        message: str,
        host: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.host = host
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class SerializationError(RDFManagerError):
    """Rendering a store to text failed."""


class QueryError(RDFManagerError):
    """A parsed query produced results that cannot be shaped into a table."""


class StorageError(RDFManagerError, IOError):
    """Persistent storage could not be opened or created."""


class BackendMismatchError(RuntimeError):
    """Operation needs a native-model store but got a store without one."""
