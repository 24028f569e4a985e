"""
Dependency injection container.

Factory functions for FastAPI dependencies. Upstream clients are built from
settings per request (the shared httpx client lives on app.state), so tests
swap any of them through app.dependency_overrides.

Dependencies: fairform.configs, fairform.application, fairform.boundary
System role: DI container for service injection
"""

import logging
import secrets
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from langchain_core.runnables import Runnable
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fairform.application.services import (
    IntakeAuditWriter,
    IntakeService,
    LifecycleJobService,
    SessionService,
)
from fairform.boundary.db import (
    SQLAlchemyLifecycleRepository,
    get_async_db,
    get_async_session_factory,
)
from fairform.boundary.openai import (
    IntakeClassifier,
    ModerationClient,
    build_intake_chat_model,
)
from fairform.configs import Settings, get_settings
from fairform.core.exceptions import AuthenticationError, ConfigurationError
from fairform.core.lifecycle import LifecycleMonitor, SessionLifecycleManager

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


@dataclass
class AuthenticatedUser:
    """Caller identity extracted from a verified token."""

    uid: str
    claims: dict[str, Any] = field(default_factory=dict)


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the async session factory for work outside the request transaction."""
    return get_async_session_factory()


def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client created in the app lifespan.

    Args:
        request: Incoming request (used to reach app.state)

    Returns:
        httpx.AsyncClient: Shared client
    """
    return request.app.state.http_client


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthenticatedUser:
    """
    Verify the bearer token and return the caller.

    Raises:
        ConfigurationError: No verification key configured
        AuthenticationError: Missing, malformed or invalid token
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing bearer token")

    auth = settings.auth
    if not auth.jwt_secret:
        raise ConfigurationError("Token verification key is not configured.")

    try:
        claims = jwt.decode(
            credentials.credentials,
            auth.jwt_secret,
            algorithms=[auth.jwt_algorithm],
            audience=auth.jwt_audience,
            options={"verify_aud": auth.jwt_audience is not None},
        )
    except JWTError as e:
        logger.warning("Rejected bearer token", extra={"error_type": type(e).__name__})
        raise AuthenticationError("Invalid bearer token") from e

    uid = claims.get("sub")
    if not uid:
        raise AuthenticationError("Token has no subject")
    return AuthenticatedUser(uid=str(uid), claims=claims)


def verify_cron_secret(
    request: Request,
    settings: Settings = Depends(get_settings_dependency),
) -> None:
    """
    Check the cron trigger's bearer secret.

    An unset secret leaves the trigger open and logs a warning.

    Raises:
        AuthenticationError: Header missing or does not match
    """
    secret = settings.lifecycle.cron_secret
    if not secret:
        logger.warning("CRON_SECRET not configured, cron job is unsecured")
        return

    header = request.headers.get("authorization") or ""
    if not secrets.compare_digest(header.encode("utf-8"), f"Bearer {secret}".encode("utf-8")):
        logger.error(
            "Unauthorized cron job attempt",
            extra={"has_auth": bool(header)},
        )
        raise AuthenticationError("Unauthorized")


def get_moderation_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings_dependency),
) -> ModerationClient:
    """Get moderation client bound to the shared HTTP client."""
    return ModerationClient(
        http_client=http_client,
        api_key=settings.openai.api_key,
        model=settings.openai.moderation_model,
        endpoint=settings.openai.moderation_endpoint,
    )


def get_intake_classifier(
    settings: Settings = Depends(get_settings_dependency),
) -> IntakeClassifier:
    """
    Get intake classifier.

    Raises:
        ConfigurationError: OPENAI_API_KEY is not set
    """
    if not settings.openai.api_key:
        raise ConfigurationError("OpenAI API key is not configured.")
    model: Runnable = build_intake_chat_model(settings.openai)
    return IntakeClassifier(model)


def get_intake_audit_writer(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> IntakeAuditWriter:
    """Get intake audit writer."""
    return IntakeAuditWriter(session_factory)


def get_intake_service(
    moderator: ModerationClient = Depends(get_moderation_client),
    classifier: IntakeClassifier = Depends(get_intake_classifier),
    audit_writer: IntakeAuditWriter = Depends(get_intake_audit_writer),
) -> IntakeService:
    """Get intake service instance."""
    return IntakeService(
        moderator=moderator,
        classifier=classifier,
        audit_writer=audit_writer,
    )


def get_session_service(db: AsyncSession = Depends(get_async_db)) -> SessionService:
    """
    Get session service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        SessionService: Session service instance
    """
    return SessionService(db=db)


def get_lifecycle_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SQLAlchemyLifecycleRepository:
    """Get lifecycle repository; each transition runs in its own transaction."""
    return SQLAlchemyLifecycleRepository(session_factory)


def get_lifecycle_job_service(
    repository: SQLAlchemyLifecycleRepository = Depends(get_lifecycle_repository),
    settings: Settings = Depends(get_settings_dependency),
) -> LifecycleJobService:
    """
    Get lifecycle job service.

    Manager and monitor are built per run; metrics cover one cleanup cycle.
    """
    manager = SessionLifecycleManager(
        repository=repository,
        config=settings.lifecycle.to_config(),
    )
    return LifecycleJobService(manager=manager, monitor=LifecycleMonitor(repository))
