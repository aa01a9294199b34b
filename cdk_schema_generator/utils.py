"""Utility functions for loading the specification database.

This module loads service-spec snapshots (plain or gzip-compressed JSON)
from files and URLs with proper error handling and validation.
"""

import gzip
import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .codegen.core.schema import UnknownPropertyTypeError
from .database import DatabaseError, SpecDatabase
from .logging_config import get_logger

logger = get_logger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


class DatabaseLoadError(Exception):
    """Custom exception for database loading errors."""

    pass


def parse_snapshot(raw: bytes, source: str) -> Any:
    """Decode a snapshot, decompressing it first if it is gzipped.

    Raises:
        DatabaseLoadError: If the content is not valid (gzipped) JSON.
    """
    try:
        if raw[:2] == GZIP_MAGIC:
            raw = gzip.decompress(raw)
        return json.loads(raw.decode("utf-8"))
    except (OSError, EOFError) as e:
        logger.error(f"Corrupt gzip data in {source}: {e}", exc_info=True)
        raise DatabaseLoadError(f"Corrupt gzip data in {source}: {e}") from e
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error(f"Invalid JSON in {source}: {e}", exc_info=True)
        raise DatabaseLoadError(f"Invalid JSON in {source}: {e}") from e


def build_database(data: Any, source: str) -> SpecDatabase:
    """Build a SpecDatabase from parsed snapshot data.

    Raises:
        DatabaseLoadError: If the snapshot is malformed.
    """
    try:
        return SpecDatabase.from_dict(data)
    except (DatabaseError, UnknownPropertyTypeError) as e:
        logger.error(f"Invalid database snapshot in {source}: {e}")
        raise DatabaseLoadError(f"Invalid database snapshot in {source}: {e}") from e


def load_database_from_file(file_path: str | Path) -> tuple[str, SpecDatabase]:
    """Load the database from a local file.

    Args:
        file_path: Path to the snapshot (``.json`` or ``.json.gz``).

    Returns:
        Tuple of (source description, database).

    Raises:
        FileNotFoundError: If file doesn't exist.
        DatabaseLoadError: If file cannot be read or is not a valid snapshot.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load database from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if not file_path.name.lower().endswith((".json", ".json.gz")):
        logger.warning(f"File does not have a .json or .json.gz extension: {file_path}")

    try:
        raw = file_path.read_bytes()
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise DatabaseLoadError(f"Error reading file {file_path}: {e}") from e

    source = str(file_path)
    db = build_database(parse_snapshot(raw, source), source)
    logger.info(f"Successfully loaded database from {file_path}")
    return source, db


def load_database_from_url(url: str, timeout: int = 30) -> tuple[str, SpecDatabase]:
    """Load the database from a URL.

    Args:
        url: URL to fetch the snapshot from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, database).

    Raises:
        DatabaseLoadError: If URL is invalid, request fails, or the response
            isn't a valid snapshot.
    """
    logger.debug(f"Attempting to load database from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise DatabaseLoadError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise DatabaseLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise DatabaseLoadError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise DatabaseLoadError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise DatabaseLoadError(f"Request error for URL {url}: {e}") from e

    db = build_database(parse_snapshot(response.content, url), url)
    logger.info(f"Successfully loaded database from {url}")
    return url, db


def load_database(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, SpecDatabase]:
    """Load the database from either a file or URL.

    Args:
        file_path: Path to local snapshot (mutually exclusive with url).
        url: URL to fetch the snapshot from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, database).

    Raises:
        DatabaseLoadError: If neither or both parameters are provided, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        logger.error("Neither file_path nor url provided")
        raise DatabaseLoadError("Either file_path or url must be provided")

    if file_path and url:
        logger.error("Both file_path and url provided")
        raise DatabaseLoadError("Cannot specify both file_path and url")

    if file_path:
        return load_database_from_file(file_path)
    else:
        return load_database_from_url(url, timeout)


def write_json(data: Any, path: str | Path, indent: int = 2) -> Path:
    """Write a document as UTF-8 JSON, keeping key order."""
    path = Path(path)
    try:
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
    except OSError as e:
        logger.error(f"Error writing {path}: {e}", exc_info=True)
        raise
    logger.info(f"Wrote {path}")
    return path
