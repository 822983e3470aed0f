"""
jService API Client

Fetches Jeopardy categories and clues from the jService API.
http://jservice.io/

Every query makes a single GET request. Failures are never raised to the
caller: the ``fetch_*`` methods return an empty list, the ``query_*`` methods
return a FetchResult saying what went wrong.
"""

import logging
import random
from typing import Any, Callable, List, Optional

import httpx

from .config import DEFAULT_BASE_URL, ClientConfig
from .models import Category, Clue
from .result import FetchResult, FetchStatus


class JServiceError(Exception):
    """A request to jService failed or returned unusable data."""

    def __init__(self, url: str, message: str, cause: Optional[Exception] = None):
        self.url = url
        self.message = message
        self.cause = cause
        super().__init__(f"{message} ({url})")


class JServiceClient:
    """
    jService API client.

    Features:
    - Pages of categories, with an optional random page
    - All clues for one category
    - Batches of random clues
    - Lenient field decoding (bad fields read as 0 or "")

    The client keeps no state between queries apart from its HTTP
    connection handle. Use it as an async context manager or call
    ``close()`` when done.
    """

    DEFAULT_BASE_URL = DEFAULT_BASE_URL

    # Upstream limit on count for categories and random clues
    MAX_COUNT = 100

    # /api/categories?count=100&offset=18000 is about as far as paging goes,
    # scaled by page size this picks a page that still has data
    MAX_PAGINATION_DEPTH = 150000

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. "http://jservice.io/api/"
            timeout: Request timeout in seconds (None waits forever)
            client: Existing httpx.AsyncClient to send requests with
            rng: Random source for random category offsets
        """
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = client
        self._owns_client = client is None
        self._rng = rng or random.Random()
        self.logger = logging.getLogger(f"{__name__}.JServiceClient")

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> "JServiceClient":
        """Create a client from ClientConfig settings."""
        return cls(base_url=config.base_url, timeout=config.timeout, **kwargs)

    async def __aenter__(self) -> "JServiceClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """
        Get or create HTTP client.

        If an injected client has been closed by its owner, it is replaced
        by a new one that this instance owns and closes in ``close()``.
        """
        if self._client is None or self._client.is_closed:
            if self._client is not None and not self._owns_client:
                self.logger.debug("Injected HTTP client is closed, creating an owned one")
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close HTTP client if this instance created it."""
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
        if self._owns_client:
            self._client = None

    def random_offset(self, count: int) -> int:
        """
        Pick a random page offset for a page of ``count`` categories.

        Returns:
            Integer in [1, MAX_PAGINATION_DEPTH // count]
        """
        upper = self.MAX_PAGINATION_DEPTH // count if count > 0 else self.MAX_PAGINATION_DEPTH
        return self._rng.randint(1, max(1, upper))

    async def query_categories(self, count: int, offset: int = 0) -> FetchResult[Category]:
        """
        Fetch a page of categories.

        Args:
            count: Categories per page (at most 100)
            offset: Page offset; a negative offset picks a random page

        Returns:
            FetchResult with Category items
        """
        if count > self.MAX_COUNT:
            self.logger.debug(f"Rejected categories count={count} (max {self.MAX_COUNT})")
            return FetchResult.rejected(f"count {count} exceeds {self.MAX_COUNT}")

        if offset < 0:
            offset = self.random_offset(count)

        url = f"{self.base_url}categories?count={count}&offset={offset}"
        return await self._query(url, self._parse_categories)

    async def query_clues(self, category_id: int) -> FetchResult[Clue]:
        """
        Fetch every clue in a category.

        The returned clues carry ``category_id`` as given here, whatever
        the response says.

        Args:
            category_id: jService category id

        Returns:
            FetchResult with Clue items
        """
        if category_id < 0:
            self.logger.debug(f"Rejected negative category_id={category_id}")
            return FetchResult.rejected(f"category_id {category_id} is negative")

        url = f"{self.base_url}category?id={category_id}"
        return await self._query(
            url, lambda data: self._parse_clues(data, category_id=category_id)
        )

    async def query_random_clues(self, count: int) -> FetchResult[Clue]:
        """
        Fetch a batch of random clues.

        Args:
            count: Number of clues (at most 100)

        Returns:
            FetchResult with Clue items
        """
        if count > self.MAX_COUNT:
            self.logger.debug(f"Rejected random clues count={count} (max {self.MAX_COUNT})")
            return FetchResult.rejected(f"count {count} exceeds {self.MAX_COUNT}")

        url = f"{self.base_url}random?count={count}"
        return await self._query(url, self._parse_clues)

    async def fetch_categories(self, count: int, offset: int = 0) -> List[Category]:
        """Fetch a page of categories, or [] on any failure."""
        return (await self.query_categories(count, offset)).items

    async def fetch_clues(self, category_id: int) -> List[Clue]:
        """Fetch every clue in a category, or [] on any failure."""
        return (await self.query_clues(category_id)).items

    async def fetch_random_clues(self, count: int) -> List[Clue]:
        """Fetch a batch of random clues, or [] on any failure."""
        return (await self.query_random_clues(count)).items

    async def _query(self, url: str, parse: Callable[[Any], list]) -> FetchResult:
        """Download ``url`` and parse it, turning any failure into a FetchResult."""
        try:
            data = await self._fetch_json(url)
        except JServiceError as e:
            self.logger.warning(f"jService request failed: {e}")
            return FetchResult.failed(url, e.cause or e.message)

        try:
            items = parse(data)
        except ValueError as e:
            self.logger.warning(f"Unexpected response from {url}: {e}")
            return FetchResult.failed(url, str(e))

        self.logger.debug(f"Parsed {len(items)} items from {url}")
        return FetchResult(status=FetchStatus.OK, items=items, url=url)

    async def _fetch_json(self, url: str) -> Any:
        """
        GET a URL and decode its JSON body.

        The status code is not checked: any response with a JSON body counts.

        Raises:
            JServiceError: On any error while sending the request or
                decoding the body
        """
        self.logger.info(f"Downloading {url}")

        try:
            client = await self._get_client()
            response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
            raise JServiceError(url, f"HTTP error: {e}", e) from e
        except Exception as e:
            raise JServiceError(url, f"Request failed: {e}", e) from e

        try:
            return response.json()
        except Exception as e:
            # RecursionError on deeply nested bodies is not a ValueError
            raise JServiceError(url, f"Invalid JSON: {e}", e) from e

    def _parse_categories(self, data: Any) -> List[Category]:
        """Map a categories response (a JSON array) to Category objects."""
        if not isinstance(data, list):
            raise ValueError("expected a JSON array of categories")
        return [Category.from_json(item) for item in data]

    def _parse_clues(self, data: Any, category_id: Optional[int] = None) -> List[Clue]:
        """Map a response object's ``clues`` array to Clue objects."""
        clues = data.get("clues") if isinstance(data, dict) else None
        if not isinstance(clues, list):
            raise ValueError("expected an object with a 'clues' array")
        return [Clue.from_json(item, category_id=category_id) for item in clues]
