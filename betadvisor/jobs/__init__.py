from . import fetch_matches  # noqa: F401

__all__ = [
    "fetch_matches",
]
