# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .download_file import DownloadFileUseCase
from .list_files import ListFilesUseCase
from .upload_file import UploadFileUseCase

__all__ = ["DownloadFileUseCase", "ListFilesUseCase", "UploadFileUseCase"]
