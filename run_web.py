#!/usr/bin/env python3
"""
Main entry point for the Courtside Stat Tracker web API.

This script launches the Flask-based web server using the settings in
courtside.config.Config (override with COURTSIDE_* environment variables).
"""
from courtside.ui.web_app import run_web_app

if __name__ == "__main__":
    run_web_app()
