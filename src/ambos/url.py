"""URL handling utilities."""


def last_path_segment(uri: str) -> str:
    """Return the last ``/``-separated segment of a URI (e.g. an AT-URI record key)."""
    return uri.rstrip("/").rsplit("/", 1)[-1]
