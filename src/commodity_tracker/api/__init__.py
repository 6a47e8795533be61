"""REST API for the dashboard front end."""

from commodity_tracker.api.app import create_app

__all__ = ["create_app"]
