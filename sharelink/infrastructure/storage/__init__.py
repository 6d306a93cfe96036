# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .cloudinary_blob_store import CloudinaryBlobStore

__all__ = ["CloudinaryBlobStore"]
