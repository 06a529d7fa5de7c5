"""
Traffic Sentinel Package.

FastAPI service that watches website traffic analytics for attribution problems.
It fetches per-day, per-channel session counts, detects anomalies in the share of
"Unassigned" traffic and emails alerts, and runs a daily organic-traffic check.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, exceptions, and dependencies
    - models: Pydantic schemas and enums
    - services: Channel decoding, aggregation, anomaly detection and formatting
    - jobs: Scheduled checks and notification delivery
"""

__version__ = "1.0.0"
