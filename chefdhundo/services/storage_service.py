"""
Object storage for uploaded resume PDFs.

Objects live under ``STORAGE_DIR/<bucket>/<path>`` on the local filesystem.
Signed URLs point at the ``/storage`` download route and carry a short-lived
storage token scoped to a single object.
"""
import logging
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote

from chefdhundo.core.config import STORAGE_DIR, STORAGE_PUBLIC_URL
from chefdhundo.core.security import create_storage_token

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when an object cannot be stored, read or removed."""


class LocalStorage:
    def __init__(self, root_dir: str, public_url: str):
        self.root_dir = Path(root_dir)
        self.public_url = public_url.rstrip("/")

    def object_path(self, bucket: str, path: str) -> Path:
        """Filesystem path of an object; rejects keys escaping the bucket."""
        bucket_dir = (self.root_dir / bucket).resolve()
        target = (bucket_dir / path).resolve()
        if bucket_dir != target and bucket_dir not in target.parents:
            raise StorageError(f"Invalid object path: {path}")
        return target

    def upload(self, bucket: str, path: str, data: bytes, upsert: bool = True) -> str:
        target = self.object_path(bucket, path)
        if target.exists() and not upsert:
            raise StorageError(f"Object already exists: {bucket}/{path}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Upload failed: {e}") from e

        logger.info(f"Stored object {bucket}/{path} ({len(data)} bytes)")
        return path

    def remove(self, bucket: str, paths: List[str]) -> int:
        """Remove objects; missing objects are skipped. Returns the number removed."""
        removed = 0
        for path in paths:
            target = self.object_path(bucket, path)
            if not target.exists():
                continue
            try:
                target.unlink()
            except OSError as e:
                raise StorageError(f"Remove failed for {bucket}/{path}: {e}") from e
            removed += 1

        logger.info(f"Removed {removed} object(s) from {bucket}")
        return removed

    def exists(self, bucket: str, path: str) -> bool:
        return self.object_path(bucket, path).is_file()

    def create_signed_url(self, bucket: str, path: str, expires_in: int) -> str:
        """URL granting read access to one object for ``expires_in`` seconds."""
        token = create_storage_token(bucket, path, expires_in)
        return f"{self.public_url}/{quote(bucket)}/{quote(path)}?token={token}"


_storage: Optional[LocalStorage] = None


def get_storage() -> LocalStorage:
    """Storage dependency."""
    global _storage
    if _storage is None:
        _storage = LocalStorage(STORAGE_DIR, STORAGE_PUBLIC_URL)
    return _storage
