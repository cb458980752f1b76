"""
Document Fetcher - Loads OpenAPI/Swagger documents from URLs or local files.

Features:
- HTTP fetch through a requests session (bearer token or basic auth)
- Optional on-disk JSON cache with TTL
- Local JSON and YAML files
- Descriptive errors on non-OK responses and invalid JSON
"""

import json
import logging
import time
from typing import Optional, Dict, Any, Tuple
from pathlib import Path
import hashlib

import requests
import yaml
from requests.auth import HTTPBasicAuth

from .errors import DocumentFetchError

logger = logging.getLogger(__name__)


class DocumentFetcher:
    """
    Fetches OpenAPI documents over HTTP

    Usage:
    ```python
    fetcher = DocumentFetcher(token="secret", cache_dir=Path(".cache/openapi"))
    document = fetcher.fetch("https://petstore3.swagger.io/api/v3/openapi.json")
    ```
    """

    # Cache TTL in seconds (1 hour)
    CACHE_TTL = 3600

    def __init__(
        self,
        token: Optional[str] = None,
        credentials: Optional[Tuple[str, str]] = None,
        timeout: int = 30,
        cache_dir: Optional[Path] = None,
        cache_ttl: Optional[int] = None,
    ):
        """
        Initialize Document Fetcher

        Args:
            token: Bearer token sent with the request (optional)
            credentials: Tuple of (username, password) for Basic Auth
            timeout: HTTP request timeout in seconds
            cache_dir: Directory for caching documents (disabled when None)
            cache_ttl: Cache TTL in seconds
        """
        self.timeout = timeout
        self.cache_dir = Path(cache_dir) if cache_dir else None
        self.cache_ttl = cache_ttl if cache_ttl is not None else self.CACHE_TTL

        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})
        if credentials:
            username, password = credentials
            self.session.auth = HTTPBasicAuth(username, password)

    def fetch(self, url: str, force_refresh: bool = False) -> Dict[str, Any]:
        """
        Fetch a document, using the file cache if available

        Args:
            url: Document URL
            force_refresh: Bypass the file cache

        Returns:
            Parsed JSON document

        Raises:
            DocumentFetchError: On network errors, non-OK status or invalid JSON
        """
        if not force_refresh:
            cached = self._try_load_file_cache(url)
            if cached is not None:
                logger.info(f"Loaded document from file cache for {url}")
                return cached

        logger.debug(f"Fetching OpenAPI document: {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise DocumentFetchError(f"Failed to fetch OpenAPI document from {url}: {e}") from e

        if not response.ok:
            raise DocumentFetchError(
                f"Failed to fetch OpenAPI document: {response.status_code} {response.reason}"
            )

        try:
            document = response.json()
        except ValueError as e:
            raise DocumentFetchError(f"Invalid JSON in OpenAPI document from {url}: {e}") from e

        logger.info(f"Successfully fetched OpenAPI document from {url}")
        self._save_file_cache(url, document)
        return document

    @staticmethod
    def load_file(file_path: Path) -> Any:
        """
        Load a document from a local JSON or YAML file

        Raises:
            DocumentFetchError: If the file cannot be read or decoded
        """
        file_path = Path(file_path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise DocumentFetchError(f"Cannot read OpenAPI document {file_path}: {e}") from e

        try:
            if file_path.suffix.lower() in (".yaml", ".yml"):
                return yaml.safe_load(text)
            return json.loads(text)
        except (ValueError, yaml.YAMLError) as e:
            raise DocumentFetchError(f"Cannot decode OpenAPI document {file_path}: {e}") from e

    def _try_load_file_cache(self, url: str) -> Optional[Dict[str, Any]]:
        """Try to load a cached document from file"""
        if self.cache_dir is None:
            return None

        try:
            cache_file = self._get_cache_file_path(url)
            if not cache_file.exists():
                return None

            # Check if cache is still valid (TTL)
            file_time = cache_file.stat().st_mtime
            if time.time() - file_time > self.cache_ttl:
                logger.debug(f"Cache file expired: {cache_file}")
                return None

            with open(cache_file, "r", encoding="utf-8") as f:
                document = json.load(f)
                logger.debug(f"Loaded document from cache file: {cache_file}")
                return document

        except (OSError, ValueError) as e:
            logger.warning(f"Error loading cache file: {e}")
            return None

    def _save_file_cache(self, url: str, document: Dict[str, Any]) -> None:
        """Save a document to the file cache"""
        if self.cache_dir is None:
            return

        try:
            cache_file = self._get_cache_file_path(url)
            cache_file.parent.mkdir(parents=True, exist_ok=True)

            with open(cache_file, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
                logger.debug(f"Saved document to cache file: {cache_file}")

        except (OSError, TypeError) as e:
            logger.warning(f"Error saving cache file: {e}")

    def _get_cache_file_path(self, url: str) -> Path:
        """Get cache file path based on document URL"""
        # Hash the URL to avoid filesystem issues
        url_hash = hashlib.md5(url.encode()).hexdigest()[:8]
        return self.cache_dir / f"openapi_{url_hash}.json"
