"""
UI package for Champions 315.

This package contains the Flask web server exposing the live match API.
"""
from .web_app import create_app, run_web_app, WebAppState

__all__ = ["create_app", "run_web_app", "WebAppState"]
