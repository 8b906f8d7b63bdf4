#!/usr/bin/env python3
"""Smoke-test script: list hosts known to an HG659 router.

Usage::

    export HG659_HOST="192.168.1.1"
    export HG659_PASSWORD="your-password"
    python examples/get_hosts.py [--online]

Prints one JSON object per host.  With ``--online``, hosts the router
reports as disconnected are skipped.
"""

from __future__ import annotations

import json
import os
import sys


def main() -> None:
    password = os.environ.get("HG659_PASSWORD")
    if password is None:
        print("ERROR: required environment variable 'HG659_PASSWORD' is not set.", file=sys.stderr)
        sys.exit(1)
    host = os.environ.get("HG659_HOST", "192.168.1.1")
    username = os.environ.get("HG659_USERNAME", "user")
    online_only = "--online" in sys.argv[1:]

    from hg659.client.errors import HG659Error
    from hg659.client.session import HG659Credentials, HG659Session

    with HG659Session(host, HG659Credentials(username, password)) as session:
        try:
            session.open()
            hosts = session.get_hosts()
        except HG659Error as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            sys.exit(1)

    for entry in hosts:
        if online_only and not entry.is_connected:
            continue
        print(json.dumps(entry.to_dict()))


if __name__ == "__main__":
    main()
