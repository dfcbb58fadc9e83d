"""
Credential Hasher

One-way password hashing with bcrypt.
"""

import asyncio

import bcrypt

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class CredentialHasher:
    """
    Salted, slow password hashing.

    Business Rules:
    - bcrypt with a tunable cost factor (default 12)
    - Empty passwords are never hashed
    - Hashing runs in a worker thread so it does not stall the event loop
    - verify_dummy() costs the same as a real verification, for callers
      that must not reveal whether an account exists
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = self.hash_sync("dummy_password")

    @staticmethod
    def _encode(plaintext: str) -> bytes:
        return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash_sync(self, plaintext: str) -> str:
        if not plaintext:
            raise ValueError("Password must not be empty")
        digest = bcrypt.hashpw(self._encode(plaintext), bcrypt.gensalt(self.rounds))
        return digest.decode("utf-8")

    def verify_sync(self, plaintext: str, digest: str) -> bool:
        if not plaintext or not digest:
            return False
        try:
            return bcrypt.checkpw(self._encode(plaintext), digest.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False

    async def hash(self, plaintext: str) -> str:
        return await asyncio.to_thread(self.hash_sync, plaintext)

    async def verify(self, plaintext: str, digest: str) -> bool:
        return await asyncio.to_thread(self.verify_sync, plaintext, digest)

    async def verify_dummy(self, plaintext: str) -> bool:
        """Burn one verification against a throwaway hash; always False."""
        await asyncio.to_thread(self.verify_sync, plaintext or "x", self._dummy_hash)
        return False
