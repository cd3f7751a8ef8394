#!/usr/bin/env python3
"""
Quick Demo: Concurrent Requests Sharing One Token Refresh

Signs in to a running ResearchConnect backend and makes the stored token look
expired locally, so that a burst of concurrent requests has to refresh it.  Only one refresh
call goes out; every request completes with the new token.

Usage:
    RESEARCH_CONNECT_API=http://localhost:8080/v1 \
        python examples/quick_demo.py EMAIL PASSWORD
"""

import asyncio
import sys

from research_connect import ResearchConnect
from research_connect.auth.storage import MemoryCredentialStore
from research_connect.utils.config import load_config
from research_connect.utils.logging_setup import setup_logging


async def run(email: str, password: str, burst: int = 5) -> None:
    config = load_config()
    store = MemoryCredentialStore()

    # A leeway larger than any token lifetime makes every token "expired".
    config["auth"]["expiry_leeway_seconds"] = 10**9

    async with ResearchConnect.from_config(config, store=store) as rc:
        print("=" * 60)
        print(f"Backend: {config['api']['base_url']}")
        print("=" * 60)

        await rc.auth.login(email, password)
        first_token = store.get_token()
        print(f"\nSigned in as {email}")

        print(f"Sending {burst} concurrent requests with an 'expired' token...")
        results = await asyncio.gather(*(rc.auth.me() for _ in range(burst)))

        print(f"\n{'Request':<10}{'uid':<20}{'type':<6}")
        print("-" * 36)
        for i, user in enumerate(results, 1):
            print(f"{i:<10}{user.get('uid', ''):<20}{user.get('type', ''):<6}")

        print()
        print(f"Refreshes performed:  {rc.api.guard.refresh_count}")
        print(f"Token changed:        {store.get_token() != first_token}")


def main():
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(2)

    setup_logging("INFO")
    asyncio.run(run(sys.argv[1], sys.argv[2]))


if __name__ == "__main__":
    main()
