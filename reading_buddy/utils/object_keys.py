"""Mapping between object-storage keys and public URLs.

Book PDFs and page images live in an S3-compatible bucket and are stored in
the database by their public URL. These helpers convert in both directions
and build the keys used for rendered page images.
"""

from typing import Optional
from urllib.parse import unquote, urlparse

from reading_buddy.models.config import StorageSettings


class ObjectUrlMapper:
    """Converts object keys to public URLs and back for one bucket"""

    def __init__(self, settings: StorageSettings):
        self.settings = settings

    @property
    def base_url(self) -> str:
        """Public endpoint, including the port only when it is not the default"""
        protocol = "https" if self.settings.use_ssl else "http"
        default_port = 443 if self.settings.use_ssl else 80
        port = self.settings.port
        port_segment = f":{port}" if port and port != default_port else ""
        return f"{protocol}://{self.settings.endpoint}{port_segment}"

    def build_public_object_url(self, object_key: str) -> str:
        normalized_key = object_key.lstrip("/")
        return f"{self.base_url}/{self.settings.bucket}/{normalized_key}"

    def build_public_prefix_url(self, prefix: str) -> str:
        return self.build_public_object_url(prefix.removesuffix("/"))

    def get_object_key(self, public_url: Optional[str]) -> Optional[str]:
        """
        Extract the object key from a public URL.

        URLs built by this mapper are matched by prefix. Anything else is
        parsed: path segments are percent-decoded and a leading bucket
        segment is dropped.

        Args:
            public_url: URL stored for the object

        Returns:
            Object key, or None when the URL is empty or not a URL
        """
        if not public_url:
            return None

        trimmed = public_url.strip()
        if not trimmed:
            return None

        prefix = f"{self.base_url.rstrip('/')}/{self.settings.bucket}/"
        if trimmed.startswith(prefix):
            return trimmed[len(prefix) :] or None

        parsed = urlparse(trimmed)
        if not parsed.scheme or not parsed.netloc:
            return None

        parts = [unquote(segment) for segment in parsed.path.split("/") if segment]
        if not parts:
            return None

        if parts[0] == self.settings.bucket:
            parts = parts[1:]

        return "/".join(parts) or None


def build_book_assets_prefix(book_id: int) -> str:
    return f"book-pages/{book_id}"


def build_page_image_key(book_id: int, page_number: int) -> str:
    """Key of a rendered page image, e.g. book-pages/7/page-0012.jpg"""
    return f"{build_book_assets_prefix(book_id)}/page-{page_number:04d}.jpg"
