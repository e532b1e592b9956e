"""
Prefect flows for the refresh pipeline.

Flows:
- refresh: Run one driver refresh and store the published snapshot

Usage (local):
    python -m desklet_weather.flows.refresh

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m desklet_weather.flows.refresh
"""
