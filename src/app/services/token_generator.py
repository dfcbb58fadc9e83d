import hashlib
import secrets
from typing import NamedTuple

SECRET_BYTES = 32


class GeneratedSecret(NamedTuple):
    secret: str
    fingerprint: str


class TokenGenerator:
    """Random one-time secrets plus the SHA-256 fingerprint stored in their place"""

    def __init__(self, nbytes: int = SECRET_BYTES):
        self.nbytes = nbytes

    def generate_secret(self) -> GeneratedSecret:
        secret = secrets.token_urlsafe(self.nbytes)
        return GeneratedSecret(secret=secret, fingerprint=self.fingerprint(secret))

    @staticmethod
    def fingerprint(secret: str) -> str:
        return hashlib.sha256(secret.encode()).hexdigest()
