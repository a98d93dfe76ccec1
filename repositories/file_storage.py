"""
Media URL resolution.

Checkout configs, products and reviews store media as paths relative to the
storage bucket. StorageFileResolver turns them into absolute URLs.
"""

from __future__ import annotations

import posixpath

from config import Settings


class StorageFileResolver:
    """
    Joins a base URL with a relative media path.

    An empty path resolves to an empty string. Paths that are already
    absolute URLs are returned unchanged.
    """

    def __init__(self, base_url: str) -> None:
        if base_url and not base_url.endswith("/"):
            base_url += "/"
        self._base_url = base_url

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageFileResolver":
        return cls(settings.media_base())

    def resolve(self, relative_path: str) -> str:
        path = (relative_path or "").strip()
        if not path:
            return ""
        if path.startswith(("http://", "https://")):
            return path

        cleaned = posixpath.normpath("/" + path).lstrip("/")
        if not cleaned or cleaned == ".":
            return ""
        return f"{self._base_url}{cleaned}"


__all__ = ["StorageFileResolver"]
