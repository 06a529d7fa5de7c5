"""
FastAPI application entry point for Traffic Sentinel.

Registers the check and analysis routers and starts the ASGI server. There is
no startup work: every request reads the cached settings and talks to its
collaborators directly.
"""

import logging

from fastapi import FastAPI

from traffic_sentinel import __version__
from traffic_sentinel.api import api_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Create FastAPI application
app = FastAPI(
    title="Traffic Sentinel API",
    version=__version__,
    description=(
        "Monitors GA4 channel traffic. Provides the scheduled unassigned "
        "traffic and organic traffic checks and the channel analysis view."
    ),
)

app.include_router(api_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer probes.

    Returns:
        Dict with status 'healthy'
    """
    return {"status": "healthy"}


@app.get("/")
async def root():
    return {
        "name": "Traffic Sentinel API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "traffic_sentinel.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
