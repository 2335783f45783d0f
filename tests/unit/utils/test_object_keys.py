"""Tests for object key and public URL mapping."""

import pytest

from reading_buddy.models.config import StorageSettings
from reading_buddy.utils.object_keys import (
    ObjectUrlMapper,
    build_book_assets_prefix,
    build_page_image_key,
)


@pytest.fixture
def mapper():
    return ObjectUrlMapper(
        StorageSettings(endpoint="localhost", bucket="test-bucket", use_ssl=False, port=9000)
    )


class TestBaseUrl:
    def test_includes_non_default_port(self, mapper):
        assert mapper.base_url == "http://localhost:9000"

    def test_omits_default_port(self):
        mapper = ObjectUrlMapper(
            StorageSettings(endpoint="files.example.com", bucket="books", port=443)
        )
        assert mapper.base_url == "https://files.example.com"

    def test_endpoint_scheme_is_stripped(self):
        settings = StorageSettings(endpoint="https://files.example.com/", bucket="books")
        assert ObjectUrlMapper(settings).base_url == "https://files.example.com"


class TestBuildUrls:
    def test_object_url(self, mapper):
        assert (
            mapper.build_public_object_url("books/123/cover.jpg")
            == "http://localhost:9000/test-bucket/books/123/cover.jpg"
        )

    def test_object_url_strips_leading_slash(self, mapper):
        assert mapper.build_public_object_url("/books/1.pdf").endswith(
            "/test-bucket/books/1.pdf"
        )

    def test_prefix_url_drops_trailing_slash(self, mapper):
        url = mapper.build_public_prefix_url("books/123/pages/")
        assert url == "http://localhost:9000/test-bucket/books/123/pages"


class TestGetObjectKey:
    def test_extracts_key(self, mapper):
        url = "http://localhost:9000/test-bucket/books/123/cover.jpg"
        assert mapper.get_object_key(url) == "books/123/cover.jpg"

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_empty_input(self, mapper, url):
        assert mapper.get_object_key(url) is None

    def test_not_a_url(self, mapper):
        assert mapper.get_object_key("books/123/cover.jpg") is None

    def test_other_host_drops_bucket_segment(self, mapper):
        url = "https://cdn.example.com/test-bucket/books/my%20book/page-1.jpg"
        assert mapper.get_object_key(url) == "books/my book/page-1.jpg"

    def test_other_host_without_bucket(self, mapper):
        assert mapper.get_object_key("https://cdn.example.com/a/b.pdf") == "a/b.pdf"

    def test_bucket_only(self, mapper):
        assert mapper.get_object_key("https://cdn.example.com/test-bucket/") is None

    def test_round_trip_of_built_url(self, mapper):
        key = build_page_image_key(7, 12)
        assert mapper.get_object_key(mapper.build_public_object_url(key)) == key


def test_book_assets_prefix():
    assert build_book_assets_prefix(123) == "book-pages/123"
    assert build_book_assets_prefix(999999) == "book-pages/999999"


@pytest.mark.parametrize(
    "page_number,expected",
    [
        (1, "book-pages/123/page-0001.jpg"),
        (99, "book-pages/123/page-0099.jpg"),
        (1234, "book-pages/123/page-1234.jpg"),
    ],
)
def test_page_image_key(page_number, expected):
    assert build_page_image_key(123, page_number) == expected
