"""Traffic Sentinel test suite."""
