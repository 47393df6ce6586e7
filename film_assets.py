#!/usr/bin/env python3
"""
film_assets.py

Print every distinct value of one string attribute across the characters,
planets or starships of a Star Wars film.

Usage:
    python film_assets.py <film-title> <characters|planets|starships> <attribute>
    python film_assets.py --list-attributes <characters|planets|starships>

Example:
    python film_assets.py "A New Hope" planets climate
"""

import sys

import requests
from pydantic import ValidationError

from assets import Category, string_attributes
from config import load_settings
from exceptions import PreconditionError
from logger import logger
from retriever import retrieve_asset_property
from swapi import SwapiClient

USAGE = (
    "Usage: film_assets.py <film-title> <characters|planets|starships> <attribute>\n"
    "       film_assets.py --list-attributes <characters|planets|starships>"
)


def error(msg: str) -> None:
    print(f"[ERROR] {msg}", file=sys.stderr)


def parse_args(argv):
    """Parse and validate command-line arguments.

    Args:
        argv: list of command-line arguments (excluding script name)

    Returns:
        tuple of (film_title, category, attribute)

    Raises:
        ValueError: if the argument count is wrong or an argument is blank
    """
    if len(argv) != 3:
        raise ValueError(USAGE)

    film_title, category, attribute = (arg.strip() for arg in argv)
    if not film_title:
        raise ValueError("film-title must not be empty")
    if not attribute:
        raise ValueError("attribute must not be empty")

    return film_title, category, attribute


def list_attributes(keyword: str) -> None:
    category = Category.parse(keyword)
    for name in string_attributes(category.kind):
        print(name)


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    if argv and argv[0] == "--list-attributes":
        if len(argv) != 2:
            error(USAGE)
            return 2
        try:
            list_attributes(argv[1])
        except PreconditionError as e:
            error(str(e))
            return 1
        return 0

    try:
        film_title, category, attribute = parse_args(argv)
    except ValueError as e:
        error(str(e))
        return 2

    try:
        settings = load_settings()
    except ValueError as e:
        error(str(e))
        return 1

    with SwapiClient.from_settings(settings) as client:
        try:
            retrieve_asset_property(
                client,
                film_title,
                category,
                attribute,
                max_workers=settings.max_workers,
            )
        except PreconditionError as e:
            error(str(e))
            return 1
        except requests.RequestException as e:
            logger.debug(f"Film search against {settings.base_url} failed")
            error(f"Failed to search films: {e}")
            return 1
        except ValidationError as e:
            error(f"Unexpected response from {settings.base_url}: {e}")
            return 1

    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
