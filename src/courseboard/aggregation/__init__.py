"""Aggregation module for dashboard summaries.

- Reads fetched collections and produces the dashboard summary
- Forbidden: network calls, presentation formatting
"""
