# lifeos_travel/api/services/photo_service.py
"""Service layer for stop photo uploads."""

import logging
import os
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)

# (filename, data, content_type)
PhotoFile = Tuple[str, bytes, Optional[str]]


class LocalPhotoStorage:
    """Photo storage collaborator writing files under a local directory."""

    def __init__(self, upload_dir: str, url_prefix: str, max_bytes: int = 10 * 1024 * 1024):
        self.upload_dir = upload_dir
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes

    def upload(self, filename: str, data: bytes, content_type: Optional[str] = None) -> str:
        """Store one file and return its stable URL.

        Raises:
            ValueError: empty or oversized file
            OSError: the file could not be written
        """
        if not data:
            raise ValueError(f"{filename} is empty")
        if len(data) > self.max_bytes:
            raise ValueError(f"{filename} exceeds {self.max_bytes} bytes")

        safe_name = secure_filename(filename) or "photo"
        stored_name = f"{uuid.uuid4().hex[:12]}_{safe_name}"
        os.makedirs(self.upload_dir, exist_ok=True)
        with open(os.path.join(self.upload_dir, stored_name), "wb") as fh:
            fh.write(data)
        logger.debug(f"Stored photo {stored_name} ({len(data)} bytes)")
        return f"{self.url_prefix}/{stored_name}"


@dataclass
class PhotoBatchResult:
    urls: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"urls": self.urls, "skipped": self.skipped, "failed": self.failed}


class PhotoService:
    """Uploads a batch of photos; each file succeeds or fails on its own."""

    def __init__(self, storage, max_workers: int = 4):
        self.storage = storage
        self.max_workers = max_workers

    @staticmethod
    def is_image(content_type: Optional[str]) -> bool:
        return bool(content_type) and content_type.startswith("image/")

    def _upload_one(self, photo: PhotoFile) -> Optional[str]:
        filename, data, content_type = photo
        try:
            return self.storage.upload(filename, data, content_type)
        except (OSError, ValueError) as e:
            logger.error(f"Photo upload failed for '{filename}': {e}")
            return None

    def upload_batch(self, photos: List[PhotoFile]) -> PhotoBatchResult:
        """Upload every image in ``photos``.

        Non-image files are skipped. Uploads run concurrently and may finish in
        any order; URLs are reported in input order.
        """
        result = PhotoBatchResult()
        images = []
        for photo in photos:
            filename, _, content_type = photo
            if self.is_image(content_type):
                images.append(photo)
            else:
                logger.warning(f"Skipping non-image file: {filename}")
                result.skipped.append(filename)

        if not images:
            return result

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            urls = list(pool.map(self._upload_one, images))

        for (filename, _, _), url in zip(images, urls):
            if url is None:
                result.failed.append(filename)
            else:
                result.urls.append(url)

        logger.info(f"Uploaded {len(result.urls)}/{len(photos)} photos "
                    f"({len(result.skipped)} skipped, {len(result.failed)} failed)")
        return result


__all__ = ['LocalPhotoStorage', 'PhotoService', 'PhotoBatchResult']
