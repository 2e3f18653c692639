"""
Configuration and logging setup.

This module provides:
- ManagerConfig: timeouts, headers and workspace root used by the manager
- load_config: JSON configuration file loading
- setup_logging: console/file logging with fallback locations
"""

import json
import logging
import os
import sys
import tempfile
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Literal, Optional

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Import serialization names, in the order they are reported to users
IMPORT_FORMATS = ("RDF/XML", "N-TRIPLE", "TURTLE", "N3")

# Export serialization names
EXPORT_FORMATS = ("N3", "TURTLE")

CONNECT_TIMEOUT_MS = 5000
READ_TIMEOUT_MS = 30000


@dataclass
class ManagerConfig:
    """Configuration for the RDF manager.

    Attributes:
        workspace_root: Directory that relative import paths are resolved against
        connect_timeout_ms: Connect timeout for HTTP requests; also sent to
            SPARQL endpoints as the server-side ``timeout`` hint (default: 5000)
        read_timeout_ms: Read timeout for URL imports (default: 30000)
        default_import_format: Format used when an import names none
        rdf_accept_header: Accept header sent when importing from a URL
        sparql_accept_header: Accept header sent to SPARQL endpoints
    """
    workspace_root: str = ""
    connect_timeout_ms: int = CONNECT_TIMEOUT_MS
    read_timeout_ms: int = READ_TIMEOUT_MS
    default_import_format: str = "RDF/XML"
    rdf_accept_header: str = "application/xml, application/rdf+xml"
    sparql_accept_header: str = (
        "application/sparql-results+xml, application/sparql-results+json"
    )

    def __post_init__(self):
        """Validate configuration values."""
        if self.connect_timeout_ms <= 0:
            raise ValueError("connect_timeout_ms must be positive")
        if self.read_timeout_ms <= 0:
            raise ValueError("read_timeout_ms must be positive")
        if self.default_import_format not in IMPORT_FORMATS:
            raise ValueError(
                f"default_import_format must be one of {list(IMPORT_FORMATS)}, "
                f"got '{self.default_import_format}'"
            )

    @property
    def connect_timeout(self) -> float:
        """Connect timeout in seconds, as requests expects it."""
        return self.connect_timeout_ms / 1000.0

    @property
    def read_timeout(self) -> float:
        """Read timeout in seconds, as requests expects it."""
        return self.read_timeout_ms / 1000.0

    @classmethod
    def from_dict(cls, config_dict: Optional[Dict[str, Any]]) -> 'ManagerConfig':
        """Create config from dictionary.

        Unknown keys are ignored so one file can carry settings for other tools.

        Args:
            config_dict: Configuration dictionary (can be None for defaults)

        Returns:
            ManagerConfig instance
        """
        if config_dict is None:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in known})


def load_config(config_path: str) -> ManagerConfig:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        The parsed ManagerConfig.

    Raises:
        ValueError: If config_path is empty or file contains invalid JSON.
        FileNotFoundError: If the configuration file doesn't exist.
    """
    if not config_path:
        raise ValueError("config_path cannot be empty")

    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in configuration file {path} at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e
    except UnicodeDecodeError as e:
        raise ValueError(f"File encoding error in {path}: {e}") from e

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a JSON object, got {type(config)}")

    return ManagerConfig.from_dict(config)


def setup_logging(
    level: LogLevel = "INFO",
    log_file: Optional[str] = None
) -> Optional[str]:
    """
    Setup logging configuration with fallback locations.

    If the requested log file cannot be created, the system temp directory
    is tried next; if that fails too, logging goes to the console only.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path. If None, logs to console only.

    Returns:
        The actual log file path used, or None if logging to console only.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    actual_log_file = None

    if log_file:
        log_filename = os.path.basename(log_file) or "rdf_manager.log"
        fallback_locations = [
            log_file,
            os.path.join(tempfile.gettempdir(), log_filename),
        ]

        for fallback_path in fallback_locations:
            try:
                log_dir = os.path.dirname(fallback_path)
                if log_dir:
                    os.makedirs(log_dir, exist_ok=True)
                handlers.append(logging.FileHandler(fallback_path, encoding='utf-8'))
                actual_log_file = fallback_path
                break
            except OSError as e:
                print(f"  Could not create log at {fallback_path}: {e}")

        if actual_log_file is None:
            print("Warning: Could not write log file to any location, logging to console only")

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )

    logger = logging.getLogger(__name__)
    if actual_log_file:
        logger.info(f"Logging to: {actual_log_file}")

    return actual_log_file
