"""Application context.

Holds the process-wide collaborators built once at startup. Request
scoped services are built from it together with a database session.
"""

from dataclasses import dataclass
from datetime import timedelta

from listings.application.auth_service import AuthService
from listings.domain.policies import CapabilityPolicy
from listings.infrastructure.config import Settings
from listings.infrastructure.security import PasswordHasher, TokenCodec
from listings.infrastructure.session_store import (
    InMemorySessionStore,
    RedisSessionStore,
    SessionStore,
)


@dataclass
class AppContext:
    """Process-wide collaborators."""

    settings: Settings
    session_store: SessionStore
    access_codec: TokenCodec
    refresh_codec: TokenCodec
    password_hasher: PasswordHasher

    @property
    def capability_policy(self) -> CapabilityPolicy:
        """Registration policy for the supplier/constructor flags."""
        return CapabilityPolicy(self.settings.capability_policy)

    def auth_service(self) -> AuthService:
        """Build the authorization resolver."""
        return AuthService(
            session_store=self.session_store,
            access_codec=self.access_codec,
            refresh_codec=self.refresh_codec,
            access_ttl=timedelta(minutes=self.settings.access_token_ttl_minutes),
            refresh_ttl=timedelta(days=self.settings.refresh_token_ttl_days),
        )

    async def close(self) -> None:
        """Release external connections."""
        close = getattr(self.session_store, "close", None)
        if close is not None:
            await close()


def build_context(settings: Settings, session_store: SessionStore | None = None) -> AppContext:
    """Create the application context from settings.

    Args:
        settings: Application settings.
        session_store: Optional store overriding ``settings.session_backend``.

    Returns:
        Ready AppContext.
    """
    if session_store is None:
        if settings.session_backend == "memory":
            session_store = InMemorySessionStore()
        else:
            session_store = RedisSessionStore.from_url(
                settings.redis_url, prefix=settings.session_key_prefix
            )

    return AppContext(
        settings=settings,
        session_store=session_store,
        access_codec=TokenCodec(settings.access_token_secret, settings.token_algorithm),
        refresh_codec=TokenCodec(settings.refresh_token_secret, settings.token_algorithm),
        password_hasher=PasswordHasher(
            time_cost=settings.password_time_cost,
            memory_cost=settings.password_memory_cost,
            parallelism=settings.password_parallelism,
            hash_len=settings.password_hash_len,
        ),
    )
