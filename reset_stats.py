"""
Wipe the local habit tracker data.

Removes habits.db (every habit and logged session). settings.json is
kept unless --settings is given. Without --yes each file is confirmed
on the console first.
"""

import argparse

from BackEnd.core.paths import db_path, settings_path


def ask(question):
    return input(f"{question} (yes/no): ").strip().lower() in ("yes", "y")


def remove_data(include_settings=False, confirm=ask):
    """Delete the tracker files the user agrees to. Returns the removed paths."""
    targets = [(db_path(), "Delete all habits and sessions? This cannot be undone.")]
    if include_settings:
        targets.append((settings_path(), "Restore default settings?"))

    removed = []
    for path, question in targets:
        if not path.exists():
            print(f"Nothing to remove at {path}")
            continue
        if not confirm(question):
            print(f"Kept {path.name}")
            continue
        try:
            path.unlink()
        except OSError as e:
            print(f"✗ Could not remove {path}: {e}")
            continue
        print(f"✓ Removed {path}")
        removed.append(path)
    return removed


def main():
    parser = argparse.ArgumentParser(description="Delete the local habit tracker database.")
    parser.add_argument("--settings", action="store_true", help="Also reset settings.json.")
    parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation.")
    args = parser.parse_args()

    confirm = (lambda question: True) if args.yes else ask
    removed = remove_data(include_settings=args.settings, confirm=confirm)
    if any(p.name == "habits.db" for p in removed):
        print("A fresh database is created the next time the tracker runs.")


if __name__ == "__main__":
    main()
