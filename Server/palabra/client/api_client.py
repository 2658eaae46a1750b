"""
HTTP client for the game server.

Wraps GET /api/daily and POST /api/check. Every call has a timeout; any
transport failure or unexpected payload is raised as ApiError.
"""

import logging
from typing import Optional

import requests

from ..config.app_config import Config
from ..errors import ApiError

logger = logging.getLogger(__name__)


class WordleApiClient:
    def __init__(self, base_url: str = Config.API_BASE_URL,
                 timeout: float = Config.REQUEST_TIMEOUT_SECONDS,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise ApiError(f"{method} {path} failed: {e}") from e
        except ValueError as e:
            raise ApiError(f"{method} {path} returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise ApiError(f"{method} {path} returned {type(payload).__name__}, want object")
        return payload

    def fetch_daily_word(self) -> str:
        """Today's word, lowercased."""
        payload = self._request('GET', '/api/daily')
        word = payload.get('word')
        if not isinstance(word, str) or not word:
            raise ApiError("/api/daily response has no word")
        return word.lower()

    def check_guess(self, guess: str) -> bool:
        """True if the server accepts the guess as a dictionary word."""
        payload = self._request('POST', '/api/check', json={'guess': guess})
        result = payload.get('result')
        if not isinstance(result, bool):
            raise ApiError("/api/check response has no boolean result")
        logger.debug("Check %r -> %s", guess, result)
        return result
