"""
Password hashing (bcrypt).

Dipanggil eksplisit saat create user dan saat ganti password; model User
tidak pernah hash password secara implisit.
"""

import bcrypt

from ...config import settings

# bcrypt hanya memakai 72 byte pertama
BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode('utf-8')[:BCRYPT_MAX_BYTES], salt).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8')[:BCRYPT_MAX_BYTES], password_hash.encode('utf-8'))
    except ValueError:
        # hash yang bukan format bcrypt
        return False
