"""
Seed script for the Civic Pulse Map comments collection.

Usage:
  - Dry run (default): python scripts/seed_db.py
  - Apply to configured Firestore: python scripts/seed_db.py --apply
  - Custom seed file: python scripts/seed_db.py --file ./my_seed.json --apply

Behavior:
  - Loads a JSON array of comments (comment_text, zip_code, latitude,
    longitude, theme) from `db_seed.json` at the repo root.
  - Validates every row before writing anything.
  - Inserts through CommentStore, so rows get server-assigned ids and
    timestamps exactly like resident submissions.

NOTE: requires FIREBASE_CREDENTIALS_PATH or FIREBASE_PROJECT_ID in `.env`.
"""

import argparse
import json
import os
import sys

from pydantic import ValidationError

from app.models.comment import CommentCreate
from app.services.comment_store import get_comment_store


def load_seed(path: str) -> list:
    with open(path, "r", encoding="utf-8") as f:
        rows = json.load(f)
    if not isinstance(rows, list):
        raise ValueError(f"Seed file must contain a JSON array: {path}")
    return [CommentCreate(**row) for row in rows]


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write seed to Firestore instead of dry-run")
    parser.add_argument("--file", default=os.path.join(os.getcwd(), "db_seed.json"), help="Seed file path")
    args = parser.parse_args()

    if not os.path.exists(args.file):
        print(f"Seed file not found: {args.file}")
        return

    try:
        comments = load_seed(args.file)
    except (ValueError, ValidationError) as e:
        print(f"Invalid seed file: {e}")
        sys.exit(1)

    for comment in comments:
        print(f"Preparing: [{comment.theme.value}] {comment.comment_text[:60]} ({comment.zip_code})")

    if not args.apply:
        print("Dry run complete. Re-run with --apply to write to DB.")
        return

    store = get_comment_store()
    for comment in comments:
        saved = store.insert(comment)
        print(f"Wrote: comments/{saved.id}")
    print("Seeding completed.")


if __name__ == "__main__":
    main()
