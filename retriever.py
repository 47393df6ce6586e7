"""Concurrent fetch, extract and deduplicate for the assets of one film.

The flow for a run is:

    Category.parse -> extractor_for (validate) -> search_films
        -> Category.references -> collect -> DedupSink

Everything up to ``collect`` happens before any asset is fetched, so a bad
category, attribute or title never produces partial output.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional

import requests
from pydantic import ValidationError

from assets import Category, extractor_for
from exceptions import AmbiguousFilmError, FilmNotFoundError, MalformedReferenceError
from logger import logger
from models import Asset

SEPARATOR = "/"


def resolve_reference(reference: str) -> str:
    """Return the id segment of an asset URL such as ``https://swapi.dev/api/people/42/``.

    Raises:
        MalformedReferenceError: if the URL does not end in ``<id>/``
    """
    if not reference or not reference.endswith(SEPARATOR):
        raise MalformedReferenceError(
            f"Asset reference must end with '{SEPARATOR}': {reference!r}"
        )

    # Strip the trailing "/", then take everything after the last remaining "/"
    cleaned = reference[:-1]
    if SEPARATOR not in cleaned:
        raise MalformedReferenceError(
            f"Asset reference has no id segment: {reference!r}"
        )

    asset_id = cleaned[cleaned.rindex(SEPARATOR) + 1 :]
    if not asset_id:
        raise MalformedReferenceError(f"Asset reference has an empty id: {reference!r}")
    return asset_id


def print_value(value: str) -> None:
    print(value, flush=True)


class DedupSink:
    """Thread-safe output stream that emits each distinct value once."""

    def __init__(self, emit: Callable[[str], None] = print_value):
        self._emit = emit
        self._lock = threading.Lock()
        self._seen = set()
        self._values: List[str] = []

    def submit(self, value: str) -> bool:
        with self._lock:
            if value in self._seen:
                return False
            self._seen.add(value)
            self._values.append(value)
            self._emit(value)
            return True

    @property
    def values(self) -> List[str]:
        with self._lock:
            return list(self._values)

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __contains__(self, value: object) -> bool:
        with self._lock:
            return value in self._seen


def _collect_one(
    reference: str,
    fetch_one: Callable[[str], Optional[Asset]],
    extract: Callable[[Optional[Asset]], Optional[str]],
    sink: DedupSink,
) -> bool:
    try:
        asset_id = resolve_reference(reference)
        asset = fetch_one(asset_id)
        if asset is None:
            logger.warn(f"No asset found for {reference}")
            return False
        value = extract(asset)
    except (MalformedReferenceError, requests.RequestException, ValidationError) as e:
        logger.warn(f"Skipping {reference}: {e}")
        return False
    except Exception as e:
        logger.error(f"Unexpected failure for {reference}: {e!r}")
        return False

    if value is None:
        logger.debug(f"No string value on {reference}")
        return False

    return sink.submit(value)


def collect(
    references: Iterable[str],
    fetch_one: Callable[[str], Optional[Asset]],
    extract: Callable[[Optional[Asset]], Optional[str]],
    sink: DedupSink,
    max_workers: Optional[int] = None,
) -> int:
    """Fetch every reference concurrently and feed extracted values to the sink.

    One unit of work runs per reference; the pool has a worker per reference
    unless ``max_workers`` caps it. A failing unit contributes nothing and
    does not affect the others. Returns once every unit has settled.

    Returns:
        the number of values this call emitted
    """
    references = list(references)
    if not references:
        return 0

    workers = len(references)
    if max_workers is not None:
        workers = max(1, min(max_workers, workers))

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="asset") as pool:
        futures = [
            pool.submit(_collect_one, reference, fetch_one, extract, sink)
            for reference in references
        ]
        emitted = sum(1 for future in futures if future.result())

    return emitted


def retrieve_asset_property(
    client,
    film_title: str,
    category: str,
    attribute: str,
    sink: Optional[DedupSink] = None,
    max_workers: Optional[int] = None,
) -> DedupSink:
    """Print each distinct ``attribute`` value across one category of a film's assets.

    Raises:
        UnknownCategoryError: if ``category`` is not characters/planets/starships
        InvalidAttributeError: if ``attribute`` is not a string field of the kind
        FilmLookupError: if the title does not match exactly one film
    """
    selected = Category.parse(category)
    extract = extractor_for(selected.kind, attribute)

    films = client.search_films(film_title)
    if not films:
        raise FilmNotFoundError(
            f"No films matched the search string '{film_title}'. "
            "Please try again with an exact episode title."
        )
    if len(films) > 1:
        titles = ", ".join(f"'{film.title}'" for film in films)
        raise AmbiguousFilmError(
            f"Multiple films matched the search string '{film_title}' ({titles}). "
            "Please try again with an exact episode title."
        )

    film = films[0]
    references = selected.references(film)
    logger.info(
        f"Fetching {len(references)} {selected.value} from '{film.title}' "
        f"for attribute '{attribute}'"
    )

    if sink is None:
        sink = DedupSink()
    emitted = collect(
        references,
        client.fetcher_for(selected.kind),
        extract,
        sink,
        max_workers=max_workers,
    )
    logger.info(f"Emitted {emitted} distinct values")
    return sink
