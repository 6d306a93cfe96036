# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .sqlalchemy_ownership_store import SqlAlchemyOwnershipStore

__all__ = ["SqlAlchemyOwnershipStore"]
