#!/usr/bin/env python3
"""Generate a bearer token for manual API testing."""

from __future__ import annotations

import argparse
import sys
from datetime import timedelta
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from assessmenttasks.core.auth import create_access_token  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("user_id", help="User id placed in the token subject")
    parser.add_argument("--email", default="tester@example.com")
    parser.add_argument("--ttl", type=int, default=None, help="Lifetime in seconds")
    args = parser.parse_args()

    expires = timedelta(seconds=args.ttl) if args.ttl is not None else None
    token = create_access_token(args.user_id, email=args.email, expires_delta=expires)
    print(f"Authorization: Bearer {token}")


if __name__ == "__main__":
    main()
