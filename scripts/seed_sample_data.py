#!/usr/bin/env python3
"""
Seed the client store with demo clients.

Writes five sample clients, each with three logged workouts, into the
storage backend configured in the environment. An existing collection
is left alone unless --force is given.

Usage:
    python scripts/seed_sample_data.py [--force] [--dry-run]

Requires:
    - .env file (or environment) with STORAGE_BACKEND and its settings
"""

import sys
from pathlib import Path

# Add the project root to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def main():
    import argparse

    from fitcrm.api.dependencies import get_client_store, get_key_value_store
    from fitcrm.config.settings import get_settings
    from fitcrm.core.clients.sample_data import build_sample_clients, initialize_sample_data

    parser = argparse.ArgumentParser(description='Seed FitCRM with demo clients')
    parser.add_argument('--force', action='store_true', help='Replace any existing clients')
    parser.add_argument('--dry-run', action='store_true', help='List the clients without writing')
    args = parser.parse_args()

    settings = get_settings()
    missing = settings.validate_required_fields()
    if missing:
        print(f"ERROR: Missing configuration: {', '.join(missing)}")
        sys.exit(1)

    if args.dry_run:
        print("\n=== DRY RUN - No data will be written ===\n")
        for client in build_sample_clients():
            print(f"Would add: {client.full_name} ({client.goal.value}, "
                  f"{len(client.exercise_history)} workouts)")
        sys.exit(0)

    print(f"Using {settings.storage_backend} storage, key {settings.storage_key}")
    client_store = get_client_store(settings, get_key_value_store(settings))

    if initialize_sample_data(client_store, force=args.force):
        print(f"Seeded {len(client_store.load())} clients")
    else:
        print("Store already has clients; use --force to replace them")

    sys.exit(0)


if __name__ == '__main__':
    main()
