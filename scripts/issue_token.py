#!/usr/bin/env python3
"""
Issues a bearer token for the airdrop API (for admin use).
"""

import argparse
import os
import sys

from solairdrop.api.auth import Auth
from solairdrop.config import load_settings
from solairdrop.errors import ConfigurationError

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Issue a JWT for the airdrop API")
    parser.add_argument('user_id', help='Identifier stored in the token')
    parser.add_argument('--admin', action='store_true', help='Mark the token as an admin token')
    args = parser.parse_args(argv)

    settings = load_settings(os.path.join(BASE_DIR, '.env'))
    try:
        token = Auth(settings.jwt_secret, exp_hours=settings.jwt_expires_hours).encode_token(
            args.user_id, is_admin=args.admin
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
