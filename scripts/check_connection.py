#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify MongoDB is reachable with the configured settings.
Usage: python scripts/check_connection.py
"""
import sys

from jobboard.core.config import get_settings
from jobboard.db.mongodb import MongoConnection


def main() -> int:
    settings = get_settings()
    print("=" * 50)
    print("JOB BOARD - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    mongo = MongoConnection(settings)
    try:
        ok = mongo.connect()
    finally:
        mongo.close()

    if ok:
        print("    ✅ MongoDB: CONNECTED (indexes ensured)")
    else:
        print("    ❌ MongoDB: FAILED")

    print("\n" + "=" * 50)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
