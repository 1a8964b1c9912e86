"""Local image store handing out expiring signed URLs."""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import jwt

from wardrobe.config import config

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r"^data:(.+);base64,(.+)$", re.DOTALL)
URL_PREFIX = "/images"


class ImageStoreError(ValueError):
    """Upload rejected: malformed data URL, wrong type or too large."""


class ImageNotFound(LookupError):
    pass


class InvalidSignature(PermissionError):
    pass


@dataclass
class StoredImage:
    file_name: str
    url: str


def is_data_url(value: Optional[str]) -> bool:
    return bool(value) and value.startswith("data:")


class ImageStore:
    def __init__(
        self,
        root,
        secret_key: str,
        algorithm: str = "HS256",
        max_bytes: int = 5 * 1024 * 1024,
        expire_seconds: int = 60 * 60 * 24 * 365,
    ):
        self.root = Path(root)
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.max_bytes = max_bytes
        self.expire_seconds = expire_seconds

    def _path_for(self, file_name: str) -> Path:
        root = self.root.resolve()
        path = (root / file_name).resolve()
        if root not in path.parents:
            raise ImageNotFound(file_name)
        return path

    def upload(self, user_id, item_id: str, data_url: str) -> StoredImage:
        """Decode a base64 data URL and store it as ``<user_id>/<item_id>.<ext>``."""
        matches = DATA_URL_PATTERN.match(data_url)
        if not matches:
            raise ImageStoreError("Image must be a base64 data URL")

        mime_type, payload = matches.group(1), matches.group(2)
        if not mime_type.startswith("image/"):
            raise ImageStoreError(f"Unsupported image type: {mime_type}")
        extension = re.sub(r"[^a-z0-9]", "", mime_type.split("/", 1)[1].lower()) or "bin"

        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageStoreError(f"Invalid base64 image data: {e}") from e

        if len(data) > self.max_bytes:
            raise ImageStoreError(f"Image exceeds {self.max_bytes} bytes")

        file_name = f"{user_id}/{item_id}.{extension}"
        path = self._path_for(file_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info("Stored image %s (%d bytes)", file_name, len(data))

        return StoredImage(file_name=file_name, url=self.signed_url(file_name))

    def signed_url(self, file_name: str, expires_in: Optional[int] = None) -> str:
        if not self._path_for(file_name).is_file():
            raise ImageNotFound(file_name)

        expire = datetime.now(timezone.utc) + timedelta(
            seconds=self.expire_seconds if expires_in is None else expires_in
        )
        token = jwt.encode({"file": file_name, "exp": expire}, self.secret_key, algorithm=self.algorithm)
        return f"{URL_PREFIX}/{file_name}?token={token}"

    def resolve(self, file_name: str, token: str) -> Path:
        """Return the on-disk path for a signed request."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise InvalidSignature(str(e)) from e
        if payload.get("file") != file_name:
            raise InvalidSignature("Signature does not match image")

        path = self._path_for(file_name)
        if not path.is_file():
            raise ImageNotFound(file_name)
        return path

    def remove(self, file_name: str) -> bool:
        try:
            path = self._path_for(file_name)
        except ImageNotFound:
            return False
        if not path.is_file():
            return False
        path.unlink()
        logger.info("Removed image %s", file_name)
        return True


_store: Optional[ImageStore] = None


def get_image_store() -> ImageStore:
    """Dependency returning the process-wide image store."""
    global _store
    if _store is None:
        _store = ImageStore(
            root=config.MEDIA_ROOT,
            secret_key=config.SECRET_KEY,
            algorithm=config.ALGORITHM,
            max_bytes=config.IMAGE_MAX_BYTES,
            expire_seconds=config.SIGNED_URL_EXPIRE_SECONDS,
        )
    return _store
