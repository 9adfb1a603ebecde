import bcrypt

from backend.core import config

# bcrypt only looks at the first 72 bytes of a secret.
BCRYPT_MAX_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_secret(password), salt).decode('utf-8')


def verify_password(password: str, hashed_password: str) -> bool:
    # Raises ValueError when the stored value is not a bcrypt hash.
    return bcrypt.checkpw(_secret(password), hashed_password.encode('utf-8'))
