# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .access_gate import AccessGate
from .credentials import CredentialService
from .password_hashing import WerkzeugPasswordHasher
from .share_tokens import ShareTokenService
from .token_codec import SESSION_KIND, SHARE_KIND, TokenCodec

__all__ = [
    "AccessGate",
    "CredentialService",
    "SESSION_KIND",
    "SHARE_KIND",
    "ShareTokenService",
    "TokenCodec",
    "WerkzeugPasswordHasher",
]
