# todoapp/utils/security.py
import base64
import hashlib
import os
from typing import Optional

import bcrypt

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))


def _prehash(password: str) -> bytes:
    """SHA-256 then base64, so passwords of any length fit bcrypt's 72-byte input"""
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or BCRYPT_ROUNDS)
    return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored hash"""
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False
