"""
FastAPI router module for the scheduled traffic checks.

Implements GET /alerts/unassigned (unassigned traffic anomaly report) and
GET /alerts/organic (daily organic traffic report).

Both endpoints are called by an external cron scheduler with
``Authorization: Bearer <CRON_SECRET>``. With ``?test=true`` they run on
simulated data, skip the authorization check and deliver nothing unless
``sendEmail=true`` is also given.

Response shapes:
- /alerts/unassigned: UnassignedCheckResult
- /alerts/organic: OrganicCheckResult
"""

import logging

from fastapi import APIRouter, HTTPException, Query

from traffic_sentinel.core.dependencies import CronAuthDep, SettingsDep
from traffic_sentinel.jobs.organic_report import run_daily_organic_check
from traffic_sentinel.jobs.unassigned_alerts import run_unassigned_alert_check
from traffic_sentinel.models.schemas import OrganicCheckResult, UnassignedCheckResult


# Configure logging
logger = logging.getLogger(__name__)


# =============================================================================
# Router Definition
# =============================================================================

router = APIRouter(prefix="/alerts", tags=["alerts"])


# =============================================================================
# Endpoint Implementations
# =============================================================================


@router.get("/unassigned", response_model=UnassignedCheckResult)
async def check_unassigned_traffic(
    settings: SettingsDep,
    _: CronAuthDep,
    test: bool = Query(default=False, description="Run on simulated data"),
    spike: bool = Query(default=False, description="Simulate a rising unassigned share (test mode)"),
    send_email: bool = Query(default=False, alias="sendEmail", description="Deliver notifications in test mode"),
) -> UnassignedCheckResult:
    """
    Run the unassigned traffic anomaly report.

    Fetches the unassigned window, evaluates the three detection rules and
    notifies when at least one alert fires.

    Returns:
        UnassignedCheckResult with status, alerts and delivery flags

    Raises:
        HTTPException(401): Missing or wrong scheduler secret
        HTTPException(500): Provider, decoding or unexpected failure
    """
    try:
        return await run_unassigned_alert_check(
            test_mode=test,
            simulate_spike=spike,
            send_email=send_email,
            settings=settings,
        )
    except Exception as e:
        logger.exception("Error running unassigned traffic check")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/organic", response_model=OrganicCheckResult)
async def check_organic_traffic(
    settings: SettingsDep,
    _: CronAuthDep,
    test: bool = Query(default=False, description="Run on simulated data"),
    no_organic: bool = Query(default=False, alias="noOrganic", description="Simulate a window without organic traffic (test mode)"),
    send_email: bool = Query(default=False, alias="sendEmail", description="Deliver the report in test mode"),
) -> OrganicCheckResult:
    """
    Run the daily organic traffic report.

    Returns:
        OrganicCheckResult with session counts and delivery flags

    Raises:
        HTTPException(401): Missing or wrong scheduler secret
        HTTPException(500): Provider, decoding or unexpected failure
    """
    try:
        return await run_daily_organic_check(
            test_mode=test,
            simulate_no_organic=no_organic,
            send_email=send_email,
            settings=settings,
        )
    except Exception as e:
        logger.exception("Error running organic traffic check")
        raise HTTPException(status_code=500, detail=str(e))
