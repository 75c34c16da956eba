"""API module for courseboard.

- Serves the dashboard payload for the UI
- Forbidden: aggregation logic, direct data-service parsing
"""
