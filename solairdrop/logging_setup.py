"""
Logging configuration shared by the HTTP service and the command line scripts.
"""

import logging
import os
import sys
import time
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None, name: str = "airdrop") -> Optional[str]:
    """Configure root logging to stdout and, if ``log_dir`` is set, a timestamped file.

    Returns the log file path, if any.
    """
    handlers: list = [logging.StreamHandler(sys.stdout)]
    log_filename = None

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_filename = os.path.join(log_dir, f'{name}_{int(time.time())}.log')
        handlers.append(logging.FileHandler(log_filename))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Disable noisy HTTP request logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return log_filename
