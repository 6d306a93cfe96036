# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth_controller import AuthController
from .files_controller import FilesController
from .shared_controller import SharedController

__all__ = ["AuthController", "FilesController", "SharedController"]
