"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    AuthenticatedUser,
    get_current_user,
    get_http_client,
    get_intake_audit_writer,
    get_intake_classifier,
    get_intake_service,
    get_lifecycle_job_service,
    get_lifecycle_repository,
    get_moderation_client,
    get_session_factory,
    get_session_service,
    get_settings_dependency,
    verify_cron_secret,
)

__all__ = [
    "AuthenticatedUser",
    "get_current_user",
    "get_http_client",
    "get_intake_audit_writer",
    "get_intake_classifier",
    "get_intake_service",
    "get_lifecycle_job_service",
    "get_lifecycle_repository",
    "get_moderation_client",
    "get_session_factory",
    "get_session_service",
    "get_settings_dependency",
    "verify_cron_secret",
]
