"""Password digests for the users table.

``RollingHashHasher`` reproduces the digest written by earlier releases of the
app, so existing accounts keep working. It is a 32-bit multiply-by-31 checksum
that only avoids storing plaintext; it offers no resistance to attack.
``Pbkdf2Hasher`` is a salted drop-in for deployments that do not need to read
old files.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import os
import struct
from abc import ABC, abstractmethod

PBKDF2_ITERATIONS = 100_000
SALT_SIZE = 16


class PasswordHasher(ABC):
    """Turns plaintext passwords into stored digests and checks them."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Digest to store for *password*."""

    def verify(self, password: str, digest: str) -> bool:
        """Check *password* against a stored digest."""
        if not isinstance(digest, str):
            return False
        return hmac.compare_digest(
            self.hash(password).encode("utf-8"), digest.encode("utf-8")
        )


def _utf16_code_units(text: str) -> tuple[int, ...]:
    """Code units of *text* in UTF-16, surrogate pairs split like JavaScript strings."""
    data = text.encode("utf-16-le")
    return struct.unpack(f"<{len(data) // 2}H", data)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def rolling_hash(password: str) -> str:
    """Legacy digest: ``acc = int32((acc << 5) - acc + unit)``, then ``str(abs(acc))``."""
    acc = 0
    for unit in _utf16_code_units(password):
        acc = _to_int32((acc << 5) - acc + unit)
    return str(abs(acc))


class RollingHashHasher(PasswordHasher):
    """Deterministic legacy digest (see ``rolling_hash``)."""

    def hash(self, password: str) -> str:
        return rolling_hash(password)


class Pbkdf2Hasher(PasswordHasher):
    """Salted PBKDF2-SHA256 digest stored as ``pbkdf2$iterations$salt$hash``."""

    def __init__(self, iterations: int = PBKDF2_ITERATIONS):
        self.iterations = iterations

    def _derive(self, password: str, salt: bytes, iterations: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)

    def hash(self, password: str) -> str:
        salt = os.urandom(SALT_SIZE)
        derived = self._derive(password, salt, self.iterations)
        return "$".join(
            [
                "pbkdf2",
                str(self.iterations),
                base64.b64encode(salt).decode("ascii"),
                base64.b64encode(derived).decode("ascii"),
            ]
        )

    def verify(self, password: str, digest: str) -> bool:
        if not isinstance(digest, str):
            return False
        try:
            scheme, iterations, salt_b64, hash_b64 = digest.split("$")
            if scheme != "pbkdf2":
                return False
            salt = base64.b64decode(salt_b64)
            expected = base64.b64decode(hash_b64)
            derived = self._derive(password, salt, int(iterations))
        except ValueError:
            return False
        return hmac.compare_digest(derived, expected)


def get_password_hasher(name: str = "rolling") -> PasswordHasher:
    """Hasher selected by config name ("rolling" or "pbkdf2")."""
    if name == "pbkdf2":
        return Pbkdf2Hasher()
    if name == "rolling":
        return RollingHashHasher()
    raise ValueError(f"Unknown password hasher: {name}")
