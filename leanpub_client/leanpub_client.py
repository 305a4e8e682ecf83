"""
Leanpub API Client - Fetches a book's configuration metadata from Leanpub
"""

import logging
from typing import Any, List

import requests

from .utils import body_snippet, redact_api_key

DEFAULT_BASE_URL = "https://leanpub.com"
DEFAULT_TIMEOUT = 30.0


class LeanpubError(Exception):
    """Base class for terminal Leanpub client failures"""


class InvalidResponseError(LeanpubError):
    """A successful response whose body is not valid JSON"""

    def __init__(self, url: str, details: str = "") -> None:
        self.url = url
        super().__init__(f"parsing JSON from {url}{details}")


class CandidatesExhaustedError(LeanpubError):
    """Every candidate endpoint failed"""

    def __init__(self, slug: str, outcomes: List[str]) -> None:
        self.slug = slug
        self.outcomes = outcomes
        super().__init__(
            f"no candidate endpoint succeeded for book '{slug}':\n" + "\n".join(outcomes)
        )


class LeanpubClient:
    """Client for the Leanpub book metadata endpoints"""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool = False,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.debug = debug
        self.logger = logging.getLogger(__name__)

        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

        self.logger.debug(f"LeanpubClient initialized for {self.base_url}")

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "LeanpubClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def public_url(self, slug: str) -> str:
        """Public book endpoint, no credential embedded"""
        return f"{self.base_url}/{slug}.json"

    def metadata_url(self, slug: str) -> str:
        """Authenticated book metadata endpoint"""
        return f"{self.base_url}/{slug}/book_metadata.json?api_key={self.api_key}"

    def candidate_urls(self, slug: str, legacy: bool = False) -> List[str]:
        """
        Ordered list of URLs to try for a book
        Legacy mode only uses the public endpoint; otherwise the authenticated
        metadata endpoint comes first and the public one is the fallback
        """
        if legacy:
            return [self.public_url(slug)]
        return [self.metadata_url(slug), self.public_url(slug)]

    def fetch_book_config(self, slug: str, legacy: bool = False) -> Any:
        """
        Fetch a book's configuration JSON, trying each candidate URL in order
        Returns the parsed JSON of the first 2xx response
        """
        outcomes = []

        for url in self.candidate_urls(slug, legacy=legacy):
            self.logger.debug(f"GET {redact_api_key(url)}")
            try:
                response = self.session.get(url, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                self.logger.warning(f"Request failed: {redact_api_key(url)} - {redact_api_key(str(e))}")
                outcomes.append(f"{url} => request error: {str(e)}")
                continue

            self.logger.debug(f"GET {redact_api_key(url)} -> {response.status_code}")

            if 200 <= response.status_code < 300:
                return self._parse_json(url, response)

            outcomes.append(f"{url} => {self._describe_status(response)}{self._debug_details(response)}")

        raise CandidatesExhaustedError(slug, outcomes)

    def _parse_json(self, url: str, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            self.logger.warning(f"Invalid JSON from {redact_api_key(url)}: {str(e)}")
            raise InvalidResponseError(url, self._debug_details(response)) from e

    @staticmethod
    def _describe_status(response: requests.Response) -> str:
        if response.reason:
            return f"{response.status_code} {response.reason}"
        return str(response.status_code)

    def _debug_details(self, response: requests.Response) -> str:
        """Body snippet and headers, only in debug mode"""
        if not self.debug:
            return ""
        snippet = body_snippet(response.text)
        return f" | body snippet: {snippet!r} | headers: {dict(response.headers)}"
