"""
FastAPI dependency injection module for the Traffic Sentinel backend.

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- SettingsDep: Type alias for injecting Settings into endpoints
- verify_cron_authorization: Bearer-token guard for scheduler-triggered checks
- CronAuthDep: Type alias applying the guard to an endpoint

The check endpoints are triggered by an external cron scheduler that sends
``Authorization: Bearer <CRON_SECRET>``. Requests made with ``?test=true`` run
on simulated data and are allowed without the header.

Usage Examples:
    @router.get("/unassigned")
    async def unassigned_check(
        settings: SettingsDep,
        _: CronAuthDep,
        test: bool = Query(default=False),
    ) -> UnassignedCheckResult:
        ...

    # In tests:
    app.dependency_overrides[get_settings_dependency] = lambda: mock_settings
"""

import hmac
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Query

from traffic_sentinel.core.config import Settings, get_settings


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    This is a thin wrapper around get_settings() to enable FastAPI's
    dependency override mechanism for testing.
    """
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]


# =============================================================================
# Scheduler Authorization
# =============================================================================

def verify_cron_authorization(
    settings: SettingsDep,
    authorization: Optional[str] = Header(default=None),
    test: bool = Query(default=False, description="Run on simulated data"),
) -> None:
    """
    Reject scheduler requests that do not carry the configured bearer secret.

    Args:
        settings: Application settings providing cron_secret.
        authorization: Raw Authorization header value.
        test: Test-mode flag; test-mode requests skip the check.

    Raises:
        HTTPException(401): When the header is missing or does not match, or
            when no CRON_SECRET is configured for a non-test request.
    """
    if test:
        return

    secret = settings.cron_secret
    expected = f"Bearer {secret}" if secret else None
    if expected is None or authorization is None or not hmac.compare_digest(
        authorization, expected
    ):
        raise HTTPException(status_code=401, detail="Unauthorized")


CronAuthDep = Annotated[None, Depends(verify_cron_authorization)]
