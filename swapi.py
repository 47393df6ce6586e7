from typing import Any, Callable, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from assets import AssetKind
from config import DEFAULT_BASE_URL
from logger import logger
from models import Asset, Film, FilmSearchResult, Person, Planet, Starship

# no film references more assets than this
DEFAULT_POOL_SIZE = 64


def is_transient(exc: BaseException) -> bool:
    """Connection drops, timeouts and 5xx responses are worth another attempt."""
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return True
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return exc.response.status_code >= 500
    return False


class SwapiClient:
    """Thin binding over the read-only Star Wars API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        max_attempts: int = 3,
        backoff: float = 1.0,
        session: Optional[requests.Session] = None,
        pool_size: int = DEFAULT_POOL_SIZE,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            # one pooled connection per concurrent fetch
            adapter = HTTPAdapter(pool_connections=1, pool_maxsize=pool_size)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self.session = session
        self._get_json = retry(
            retry=retry_if_exception(is_transient),
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(multiplier=backoff, min=0, max=16 * backoff),
            reraise=True,
        )(self._get_json_once)

    @classmethod
    def from_settings(cls, settings) -> "SwapiClient":
        return cls(
            base_url=settings.base_url,
            timeout=settings.timeout,
            max_attempts=settings.max_attempts,
            pool_size=settings.max_workers or DEFAULT_POOL_SIZE,
        )

    def __enter__(self) -> "SwapiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _get_json_once(
        self, path: str, params: Optional[Dict[str, str]] = None
    ) -> Optional[Dict[str, Any]]:
        url = f"{self.base_url}/{path}"
        resp = self.session.get(url, params=params, timeout=self.timeout)
        if resp.status_code == 404:
            logger.debug(f"Nothing found at {url}")
            return None
        resp.raise_for_status()
        return resp.json()

    ## Read
    def search_films(self, title: str) -> List[Film]:
        payload = self._get_json("films/", params={"search": title})
        if payload is None:
            return []
        return FilmSearchResult.model_validate(payload).results

    def get_person(self, asset_id: str) -> Optional[Person]:
        payload = self._get_json(f"people/{asset_id}/")
        return None if payload is None else Person.model_validate(payload)

    def get_planet(self, asset_id: str) -> Optional[Planet]:
        payload = self._get_json(f"planets/{asset_id}/")
        return None if payload is None else Planet.model_validate(payload)

    def get_starship(self, asset_id: str) -> Optional[Starship]:
        payload = self._get_json(f"starships/{asset_id}/")
        return None if payload is None else Starship.model_validate(payload)

    def fetcher_for(self, kind: AssetKind) -> Callable[[str], Optional[Asset]]:
        if kind is AssetKind.PERSON:
            return self.get_person
        if kind is AssetKind.PLANET:
            return self.get_planet
        if kind is AssetKind.STARSHIP:
            return self.get_starship
        raise AssertionError(f"Unhandled asset kind: {kind}")
