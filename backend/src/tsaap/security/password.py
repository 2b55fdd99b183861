"""Password hashing for stored user credentials."""

from passlib.context import CryptContext

# pure python scheme, no native bcrypt build needed
password_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return password_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """False for a wrong password or a value that is not a known hash."""
    if not hashed_password or not password_context.identify(hashed_password):
        return False
    return password_context.verify(plain_password, hashed_password)


def needs_update(hashed_password: str) -> bool:
    """True when the hash was made with outdated settings."""
    return password_context.needs_update(hashed_password)
