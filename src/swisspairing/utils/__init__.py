"""Logging utilities."""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


import logging
import os
import sys
import tempfile
from logging.handlers import RotatingFileHandler
from typing import Optional

# the logger format used
LOG_FMT = "LVL: %(levelname)s | FILE PATH: %(pathname)s | FUN: %(funcName)s | msg: %(message)s | ln#:%(lineno)d"

# environment variable overriding the log folder
LOG_DIR_ENV = "SWISSPAIRING_LOG_DIR"
LOG_FILE_NAME = "swiss-pairing.log"


def _resolve_log_folder() -> Optional[str]:
    """Find a writable folder for the log file, or None."""
    log_folder = os.environ.get(LOG_DIR_ENV)
    if not log_folder:
        log_folder = os.path.join(tempfile.gettempdir(), "swiss-pairing", "logs")
    try:
        os.makedirs(log_folder, exist_ok=True)
    except OSError:
        return None
    return log_folder


# --- Logging Setup ---
def setup_logger(logger_name: str) -> logging.Logger:
    """Set up logger for a python module.

    Sets up file handler and console handler

    Parameters
    ----------
    logger_name : str
        The name for the logger, __name__ is idiomatic

    Returns
    -------
    logging.Logger
        the created logger
    """
    lgr = logging.getLogger(name=logger_name)
    lgr.setLevel(logging.INFO)  # Set minimum level
    # Remove any existing handlers on this logger to avoid duplicates
    for _h in list(lgr.handlers):
        lgr.removeHandler(_h)
    log_formatter = logging.Formatter(LOG_FMT)

    # File Handler
    file_handler = None
    log_folder = _resolve_log_folder()
    if log_folder:
        log_path = os.path.join(log_folder, LOG_FILE_NAME)
        # Use RotatingFileHandler to prevent unbounded log growth
        try:
            file_handler = RotatingFileHandler(
                log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
            )
            file_handler.setFormatter(log_formatter)
        except OSError:
            file_handler = None

    # Console Handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(logging.INFO)
    lgr.addHandler(console_handler)
    if file_handler:
        lgr.addHandler(file_handler)
    lgr.debug("logger %s initialized", logger_name)
    return lgr
