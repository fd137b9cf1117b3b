#!/usr/bin/env python3
"""
Main entry point for the Champions 315 web application.

This script configures logging and launches the Flask-based web server.
"""
import logging
import os

from champions315 import settings
from champions315.ui.web_app import run_web_app

if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Serve static files (if any) from the project root
    project_root = os.path.dirname(os.path.abspath(__file__))
    run_web_app(host=settings.HOST, port=settings.PORT, static_folder=project_root)
