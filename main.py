#!/usr/bin/env python3
"""
Streaming cost calculator entry point.

Run with:
    streamlit run main.py
"""

from config.settings import get_settings, configure_logging
from ui.main_ui import main

configure_logging(get_settings().log_level)

main()
