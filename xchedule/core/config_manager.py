# File: xchedule/core/config_manager.py
"""
Centralized configuration management for Xchedule.
Loads settings from environment variables (and a local .env file).
"""

import os
import re
from pathlib import Path
from typing import List, Pattern, Tuple
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration singleton."""

    # Directory searched for event files referenced by a schedule entry
    WORKSPACE_DIR = Path(os.getenv("XCHEDULE_WORKSPACE", os.getcwd()))
    LOGS_DIR = Path(os.getenv("XCHEDULE_LOGS_DIR", Path(os.getcwd()) / "logs"))
    LOG_LEVEL = os.getenv("XCHEDULE_LOG_LEVEL", "INFO").upper()

    # Identifier looked up when the front-end is given no root file
    ROOT_EVENT = os.getenv("XCHEDULE_ROOT_EVENT", "main")

    # Declared config formats, keyed by file extension
    SUPPORTED_CONFIG_TYPES: Tuple[str, ...] = ("yaml", "yml", "json", "toml")

    PERIOD_SEPARATOR = "~"

    # Tried in order, first match wins. Month, day, minute and second take two
    # digits, the hour one or two.
    TIME_FORMATS: List[Tuple[str, Pattern]] = [
        ("%Y/%m/%d %H:%M", re.compile(r"^\d{4}/\d{2}/\d{2} \d{1,2}:\d{2}$")),
        ("%Y/%m/%d %I:%M%p", re.compile(r"^\d{4}/\d{2}/\d{2} \d{1,2}:\d{2}[AaPp][Mm]$")),
        ("%Y-%m-%d %H:%M", re.compile(r"^\d{4}-\d{2}-\d{2} \d{1,2}:\d{2}$")),
        ("%Y-%m-%d %I:%M%p", re.compile(r"^\d{4}-\d{2}-\d{2} \d{1,2}:\d{2}[AaPp][Mm]$")),
        ("%Y.%m.%d %H:%M", re.compile(r"^\d{4}\.\d{2}\.\d{2} \d{1,2}:\d{2}$")),
        ("%Y.%m.%d %I:%M%p", re.compile(r"^\d{4}\.\d{2}\.\d{2} \d{1,2}:\d{2}[AaPp][Mm]$")),
        # to seconds if needed
        ("%Y/%m/%d %H:%M:%S", re.compile(r"^\d{4}/\d{2}/\d{2} \d{1,2}:\d{2}:\d{2}$")),
        ("%Y/%m/%d %I:%M:%S%p", re.compile(r"^\d{4}/\d{2}/\d{2} \d{1,2}:\d{2}:\d{2}[AaPp][Mm]$")),
        ("%Y-%m-%d %H:%M:%S", re.compile(r"^\d{4}-\d{2}-\d{2} \d{1,2}:\d{2}:\d{2}$")),
        ("%Y-%m-%d %I:%M:%S%p", re.compile(r"^\d{4}-\d{2}-\d{2} \d{1,2}:\d{2}:\d{2}[AaPp][Mm]$")),
        ("%Y.%m.%d %H:%M:%S", re.compile(r"^\d{4}\.\d{2}\.\d{2} \d{1,2}:\d{2}:\d{2}$")),
        ("%Y.%m.%d %I:%M:%S%p", re.compile(r"^\d{4}\.\d{2}\.\d{2} \d{1,2}:\d{2}:\d{2}[AaPp][Mm]$")),
    ]
    TIME_FORMAT_HINT = "YYYY/mm/dd HH:MM[:SS] (separators / - . ; optional AM/PM)"

    @classmethod
    def is_supported_type(cls, config_type: str) -> bool:
        """Check whether a file extension maps to a readable config format."""
        return config_type.lower().lstrip(".") in cls.SUPPORTED_CONFIG_TYPES

    @classmethod
    def validate(cls) -> bool:
        """Validate that all required configuration is present."""
        # Deferred: the logger module imports Config
        from xchedule.utils.logger import setup_logger

        logger = setup_logger(__name__)
        errors = []

        if not cls.WORKSPACE_DIR.is_dir():
            errors.append(f"workspace directory not found at {cls.WORKSPACE_DIR}")

        if errors:
            for error in errors:
                logger.error(f"Configuration Error: {error}")
            return False

        return True
