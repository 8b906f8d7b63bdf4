#!/usr/bin/env python3
"""Smoke-test script: log in to an HG659 router and print device info.

Usage::

    export HG659_HOST="192.168.1.1"
    export HG659_USERNAME="user"
    export HG659_PASSWORD="your-password"
    python examples/get_device_info.py

Exit codes:
    0 — device info retrieved and printed successfully.
    1 — missing environment variable or client error.
"""

from __future__ import annotations

import json
import os
import sys


def _env(name: str, default: str | None = None) -> str:
    value = os.environ.get(name, default)
    if value is None:
        print(f"ERROR: required environment variable {name!r} is not set.", file=sys.stderr)
        sys.exit(1)
    return value


def main() -> None:
    host = _env("HG659_HOST", "192.168.1.1")
    username = _env("HG659_USERNAME", "user")
    password = _env("HG659_PASSWORD")

    # Import here so import errors surface after env var check.
    from hg659.client.errors import HG659Error
    from hg659.client.session import HG659Credentials, HG659Session

    with HG659Session(host, HG659Credentials(username, password)) as session:
        try:
            session.open()
            info = session.get_device_info()
        except HG659Error as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            sys.exit(1)

    print(json.dumps(info.to_dict(), indent=2))


if __name__ == "__main__":
    main()
