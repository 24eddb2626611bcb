#!/usr/bin/env python3
"""
Runs the airdrop HTTP service.
"""

import os

import uvicorn

from solairdrop.api import create_app
from solairdrop.config import load_settings
from solairdrop.logging_setup import setup_logging

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def main():
    settings = load_settings(os.path.join(BASE_DIR, '.env'))
    setup_logging(settings.log_level, settings.log_dir, name="airdrop_service")

    app = create_app(settings)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
