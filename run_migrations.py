#!/usr/bin/env python
"""
Run Alembic migrations

Usage:
    python run_migrations.py                       # upgrade to head
    python run_migrations.py "add vendor tagline"  # autogenerate a revision, then upgrade
"""

import subprocess
import sys
import os

def run_migrations(message=None):
    """Optionally autogenerate a revision, then upgrade to head"""

    # Load environment from .env if exists
    if os.path.exists('.env'):
        from dotenv import load_dotenv
        load_dotenv()

    try:
        if message:
            print(f"Creating migration: {message}")
            subprocess.run(
                ['alembic', 'revision', '--autogenerate', '-m', message],
                check=True
            )

        print("Applying migrations...")
        subprocess.run(
            ['alembic', 'upgrade', 'head'],
            check=True
        )

        print("Migrations completed successfully")
        return 0

    except subprocess.CalledProcessError as e:
        print(f"Migration failed with error: {e}")
        return 1
    except FileNotFoundError:
        print("Alembic not found. Install with: pip install alembic")
        return 1

if __name__ == "__main__":
    sys.exit(run_migrations(sys.argv[1] if len(sys.argv) > 1 else None))
