"""
Load the featured sample events into the events collection.
Usage:
  python scripts/seed_events.py            # insert events whose slug is not taken yet
  python scripts/seed_events.py --dry-run  # validate only, write nothing
Exit: 0 = all events valid; 1 = at least one event failed validation; 2 = database unreachable.
"""
import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import load_config
from app.core.errors import ConfigurationError, DatabaseConnectionError, SlugConflictError
from app.data.sample_events import SAMPLE_EVENTS
from app.db.collections import ensure_indexes
from app.db.connection import MongoConnectionManager
from app.services.events import EventService
from app.storage.events import EventRepository
from app.validation.event_validator import validate_event

logging.basicConfig(level=logging.WARNING)


def seed(service: EventService, events: list, dry_run: bool = False) -> dict:
    counts = {"created": 0, "skipped": 0, "invalid": 0}
    for raw in events:
        result = validate_event(raw)
        if not result.ok:
            fields = ", ".join(i.field for i in result.issues)
            print(f"INVALID  {raw.get('title')!r}: {fields}")
            counts["invalid"] += 1
            continue

        slug = result.value["slug"]
        if dry_run or service.repository.slug_exists(slug):
            print(f"SKIP     {slug}")
            counts["skipped"] += 1
            continue

        try:
            service.create(raw)
        except SlugConflictError:
            print(f"SKIP     {slug}")
            counts["skipped"] += 1
            continue
        print(f"CREATED  {slug}")
        counts["created"] += 1
    return counts


def main():
    ap = argparse.ArgumentParser(description="Seed featured sample events.")
    ap.add_argument("--dry-run", action="store_true", help="Validate only, do not write")
    args = ap.parse_args()

    try:
        config = load_config()
    except ConfigurationError as e:
        print(str(e))
        sys.exit(2)

    manager = MongoConnectionManager.from_config(config, initializer=ensure_indexes)
    try:
        counts = seed(EventService(EventRepository(manager)), SAMPLE_EVENTS, dry_run=args.dry_run)
    except DatabaseConnectionError as e:
        print(str(e))
        sys.exit(2)
    finally:
        manager.close()

    print(f"created={counts['created']} skipped={counts['skipped']} invalid={counts['invalid']}")
    sys.exit(1 if counts["invalid"] else 0)


if __name__ == "__main__":
    main()
