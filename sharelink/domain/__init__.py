# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import FileRecord, SessionClaims, ShareClaims, ShareGrant, StorageRef, User
from .exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
    UnavailableError,
)
from .repositories import BlobStore, OwnershipStore, PasswordHasher

__all__ = [
    "BlobStore",
    "ConflictError",
    "FileRecord",
    "InvalidInputError",
    "NotFoundError",
    "OwnershipStore",
    "PasswordHasher",
    "SessionClaims",
    "ShareClaims",
    "ShareGrant",
    "StorageRef",
    "UnauthorizedError",
    "UnavailableError",
    "User",
]
