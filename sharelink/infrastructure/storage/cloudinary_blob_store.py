# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Cloudinary-backed blob store."""

from __future__ import annotations

import io
from pathlib import PurePath

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from sharelink.domain.entities import StorageRef
from sharelink.domain.exceptions import UnavailableError
from sharelink.domain.repositories import BlobStore
from sharelink.shared.config import StorageConfig
from sharelink.shared.logging import logger

_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}
_MEDIA_EXTENSIONS = {".mp4", ".mov", ".avi", ".mp3"}


def _resource_type(original_name: str) -> str:
    ext = PurePath(original_name).suffix.lower()
    if ext in _IMAGE_EXTENSIONS:
        return "image"
    if ext in _MEDIA_EXTENSIONS:
        # Cloudinary files audio under the video resource type
        return "video"
    return "raw"


class CloudinaryBlobStore(BlobStore):
    def __init__(self, config: StorageConfig) -> None:
        self._configured = config.is_configured()
        self._folder = config.folder
        if not self._configured:
            logger.warning("blob: Cloudinary credentials missing, uploads are disabled")
            return
        cloudinary.config(
            cloud_name=config.cloud_name,
            api_key=config.api_key,
            api_secret=config.api_secret,
            secure=True,
        )

    def put(self, data: bytes, original_name: str, mime_type: str) -> StorageRef:
        if not self._configured:
            raise UnavailableError("blob_store")
        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(data),
                resource_type=_resource_type(original_name),
                folder=self._folder,
                use_filename=True,
                unique_filename=True,
                filename_override=original_name,
                overwrite=False,
            )
        except cloudinary.exceptions.Error as exc:
            logger.error(f"blob.put: cloudinary rejected upload ({type(exc).__name__})")
            raise UnavailableError("blob_store") from exc
        except OSError as exc:
            logger.error(f"blob.put: cloudinary unreachable ({type(exc).__name__})")
            raise UnavailableError("blob_store") from exc

        url = result.get("secure_url") or result.get("url")
        logger.debug(f"blob.put: stored public_id={result.get('public_id')}")
        return StorageRef(
            id=str(result["public_id"]),
            url=str(url),
            size=int(result.get("bytes", len(data))),
            mime_type=mime_type,
        )
