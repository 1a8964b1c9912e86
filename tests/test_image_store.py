"""Unit tests for the local signed-URL image store."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import parse_qs, urlparse

import pytest

from wardrobe.storage.images import (
    ImageNotFound,
    ImageStore,
    ImageStoreError,
    InvalidSignature,
    is_data_url,
)


@pytest.fixture
def store(tmp_path: Path) -> ImageStore:
    return ImageStore(tmp_path / "media", secret_key="unit-test-secret-key-of-sufficient-length", max_bytes=1024)


def _token(url: str) -> str:
    return parse_qs(urlparse(url).query)["token"][0]


def test_upload_and_resolve(store: ImageStore, png_data_url: str) -> None:
    stored = store.upload(7, "abc", png_data_url)

    assert stored.file_name == "7/abc.png"
    assert stored.url.startswith("/images/7/abc.png?token=")
    path = store.resolve(stored.file_name, _token(stored.url))
    assert path.read_bytes().startswith(b"\x89PNG")


def test_signature_is_bound_to_file(store: ImageStore, png_data_url: str) -> None:
    first = store.upload(7, "first", png_data_url)
    store.upload(7, "second", png_data_url)

    with pytest.raises(InvalidSignature):
        store.resolve("7/second.png", _token(first.url))


def test_expired_signature(store: ImageStore, png_data_url: str) -> None:
    stored = store.upload(7, "abc", png_data_url)
    url = store.signed_url(stored.file_name, expires_in=-5)

    with pytest.raises(InvalidSignature):
        store.resolve(stored.file_name, _token(url))


def test_rejects_non_image_and_oversized(store: ImageStore) -> None:
    with pytest.raises(ImageStoreError):
        store.upload(1, "doc", "data:text/plain;base64,aGVsbG8=")
    with pytest.raises(ImageStoreError):
        store.upload(1, "big", "data:image/png;base64," + "A" * 4000)
    with pytest.raises(ImageStoreError):
        store.upload(1, "plain", "https://example.com/a.png")


def test_path_traversal_is_refused(store: ImageStore) -> None:
    with pytest.raises(ImageNotFound):
        store.signed_url("../outside.png")
    assert store.remove("../../etc/passwd") is False


def test_remove(store: ImageStore, png_data_url: str) -> None:
    stored = store.upload(3, "gone", png_data_url)

    assert store.remove(stored.file_name) is True
    assert store.remove(stored.file_name) is False
    with pytest.raises(ImageNotFound):
        store.signed_url(stored.file_name)


def test_is_data_url() -> None:
    assert is_data_url("data:image/png;base64,AAAA")
    assert not is_data_url("https://example.com/x.png")
    assert not is_data_url("")
