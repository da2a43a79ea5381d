"""Token signing and password hashing primitives."""

from datetime import datetime
from typing import Any

import structlog
from argon2 import PasswordHasher as Argon2Hasher
from argon2 import Type
from argon2.exceptions import InvalidHashError, VerificationError
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from listings.domain.exceptions import InvalidTokenError, TokenExpiredError

logger = structlog.get_logger()


class TokenCodec:
    """Signs and parses HMAC JWTs with a single secret.

    Access and refresh tokens use separate codec instances so a refresh
    token can never pass as an access token and vice versa.
    """

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        """Initialize codec.

        Args:
            secret: HMAC signing secret.
            algorithm: JWS algorithm.
        """
        self.secret = secret
        self.algorithm = algorithm

    def issue(self, claims: dict[str, Any], expires_at: datetime) -> str:
        """Sign a token.

        Args:
            claims: Claims to embed.
            expires_at: Expiry, stored as the ``exp`` claim.

        Returns:
            Encoded token string.
        """
        to_encode = dict(claims)
        to_encode["exp"] = expires_at
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def parse(self, token: str) -> dict[str, Any]:
        """Verify a token and return its claims.

        Args:
            token: Encoded token.

        Returns:
            Decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the signature or format is invalid.
        """
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except JWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e


class PasswordHasher:
    """Argon2id password hashing."""

    def __init__(
        self,
        time_cost: int = 1,
        memory_cost: int = 64 * 1024,
        parallelism: int = 4,
        hash_len: int = 32,
    ) -> None:
        """Initialize hasher.

        Args:
            time_cost: Number of passes.
            memory_cost: Memory in KiB.
            parallelism: Number of lanes.
            hash_len: Output length in bytes.
        """
        self._hasher = Argon2Hasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=hash_len,
            type=Type.ID,
        )
        self._dummy_hash: str | None = None

    def hash(self, plaintext: str) -> str:
        """Derive a salted hash in PHC string format."""
        return self._hasher.hash(plaintext)

    def verify_absent(self, plaintext: str) -> bool:
        """Spend one verification on a fixed hash and report failure.

        Used when no account matches, so the lookup costs the same as a
        wrong password.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash("listings-absent-account")
        self.verify(plaintext, self._dummy_hash)
        return False

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Check a password against a stored hash."""
        try:
            return self._hasher.verify(hashed, plaintext)
        except VerificationError:
            return False
        except InvalidHashError:
            logger.warning("Stored password hash is malformed")
            return False
