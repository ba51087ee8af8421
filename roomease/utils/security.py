import base64
import os

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

_SCHEME = "scrypt"
_SALT_BYTES = 16
_KEY_LENGTH = 32
_N, _R, _P = 2**14, 8, 1


def _kdf(salt: bytes) -> Scrypt:
    # Scrypt instances are single-use.
    return Scrypt(salt=salt, length=_KEY_LENGTH, n=_N, r=_R, p=_P)


def hash_password(password: str) -> str:
    """Hash a password as ``scrypt$<salt-b64>$<hash-b64>``."""
    salt = os.urandom(_SALT_BYTES)
    digest = _kdf(salt).derive(password.encode("utf-8"))
    return "$".join(
        [
            _SCHEME,
            base64.b64encode(salt).decode("ascii"),
            base64.b64encode(digest).decode("ascii"),
        ]
    )


def verify_password(password: str, stored: str) -> bool:
    """Constant-time check of ``password`` against a stored hash."""
    try:
        scheme, salt_b64, digest_b64 = stored.split("$")
        salt = base64.b64decode(salt_b64)
        digest = base64.b64decode(digest_b64)
    except ValueError:
        return False
    if scheme != _SCHEME:
        return False
    try:
        _kdf(salt).verify(password.encode("utf-8"), digest)
    except InvalidKey:
        return False
    return True
