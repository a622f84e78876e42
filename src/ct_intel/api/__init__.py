"""HTTP API and dashboard."""

from .dashboard import render_dashboard
from .main import create_app

__all__ = ["create_app", "render_dashboard"]
