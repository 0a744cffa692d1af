"""
UI package for the Courtside game tracker.

This package contains the Flask JSON API used by scorekeeper frontends.
"""
from .web_app import create_app, run_web_app, WebAppState

__all__ = ["create_app", "run_web_app", "WebAppState"]
