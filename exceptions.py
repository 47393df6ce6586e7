class AssetRetrievalError(Exception):
    """Base exception for film asset retrieval."""


class PreconditionError(AssetRetrievalError, ValueError):
    """Raised before any asset is fetched; aborts the whole run."""


class UnknownCategoryError(PreconditionError):
    """Raised when the category keyword is not one a film carries."""


class InvalidAttributeError(PreconditionError):
    """Raised when an attribute is not a string field of the asset kind."""


class FilmLookupError(PreconditionError):
    """Raised when a title search does not resolve to exactly one film."""


class FilmNotFoundError(FilmLookupError):
    """Raised when no film matches the title."""


class AmbiguousFilmError(FilmLookupError):
    """Raised when several films match the title."""


class MalformedReferenceError(AssetRetrievalError, ValueError):
    """Raised when an asset URL does not end in an ``<id>/`` segment."""
