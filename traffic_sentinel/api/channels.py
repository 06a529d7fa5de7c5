"""
FastAPI router module for the channel analysis view.

Implements GET /channels/analysis, which returns the aggregated channel data
of a window ending yesterday together with the detected unassigned alerts,
headline statistics and the raw provider rows.

This endpoint is read-only and is not guarded by the scheduler secret.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from traffic_sentinel.core.dependencies import SettingsDep
from traffic_sentinel.jobs.data_source import load_channel_rows
from traffic_sentinel.models.schemas import ChannelAggregation, ChannelAnalysisResponse
from traffic_sentinel.services.aggregation import summarize_window
from traffic_sentinel.services.channel_analysis import analyze_channel_window


# Configure logging
logger = logging.getLogger(__name__)


router = APIRouter(prefix="/channels", tags=["channels"])


@router.get("/analysis", response_model=ChannelAnalysisResponse)
async def get_channel_analysis(
    settings: SettingsDep,
    days: Optional[int] = Query(default=None, ge=1, le=365, description="Window length in days"),
    test: bool = Query(default=False, description="Use simulated data"),
) -> ChannelAnalysisResponse:
    """
    Channel breakdown of the last `days` days.

    Args:
        days: Window length (default: CHANNEL_ANALYSIS_WINDOW_DAYS)
        test: Simulate the window instead of querying GA4

    Returns:
        ChannelAnalysisResponse {data, alerts, summary, rawRows}
    """
    window_days = days or settings.channel_analysis_window_days

    try:
        raw_rows = await load_channel_rows(
            window_days,
            settings,
            test_mode=test,
            end_date=date.today() - timedelta(days=1),
        )
        analysis = analyze_channel_window(raw_rows, settings.detection_thresholds())
    except Exception as e:
        logger.exception(f"Error analysing {window_days} days of channel data")
        raise HTTPException(status_code=500, detail=str(e))

    return ChannelAnalysisResponse(
        data=ChannelAggregation(
            byDate=analysis.byDate,
            byChannel=analysis.byChannel,
            unassignedDays=analysis.unassignedDays,
        ),
        alerts=analysis.alerts,
        summary=summarize_window(analysis),
        rawRows=raw_rows,
        windowDays=window_days,
        isTest=test,
        propertyId=None if test else settings.ga_property_id,
    )
