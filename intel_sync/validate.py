import argparse
import sys
from typing import Any, Dict, List

from intel_sync.config import ConfigError, SyncConfig, load_config
from intel_sync.merge import start_date_key, is_fetched
from intel_sync.store import read_entries_strict
from intel_sync.transform import STATUS_CONFIRMED


def validate_entries(entries: List[Dict[str, Any]], config: SyncConfig) -> List[str]:
    """Check a loaded intel list; returns human-readable problems (empty = OK).

    Entries without an id are hand-written ones and only take part in the order check.
    """
    errors = []
    seen = set()
    for i, e in enumerate(entries):
        if not isinstance(e, dict):
            errors.append(f"entry #{i} is not an object")
            continue
        eid = e.get("id")
        if eid is None:
            continue
        if not isinstance(eid, str) or not eid:
            errors.append(f"entry #{i} has an invalid id {eid!r}")
            continue
        if eid in seen:
            errors.append(f"duplicate id {eid}")
        seen.add(eid)

        if not is_fetched(e, config.id_prefix):
            continue
        if len(e.get("teaser") or "") > config.teaser_limit:
            errors.append(f"{eid}: teaser longer than {config.teaser_limit}")
        if len(e.get("summary") or "") > config.summary_limit:
            errors.append(f"{eid}: summary longer than {config.summary_limit}")
        if e.get("status") != STATUS_CONFIRMED:
            errors.append(f"{eid}: status is {e.get('status')!r}, expected 'confirmed'")
        if len(e.get("sources") or []) != 1:
            errors.append(f"{eid}: expected exactly one source")

    objects = [e for e in entries if isinstance(e, dict)]
    for prev, cur in zip(objects, objects[1:]):
        if start_date_key(prev) < start_date_key(cur):
            errors.append(f"not sorted: {prev.get('id')} ({prev.get('startDate')}) "
                          f"before {cur.get('id')} ({cur.get('startDate')})")
    return errors


def main(argv=None):
    parser = argparse.ArgumentParser(description="Validate intel-data.json after a sync.")
    parser.add_argument("--file", help="Intel JSON file (default from config).")
    parser.add_argument("--config", help="YAML config file.")
    parser.add_argument("--revision", type=int, choices=[1, 2], default=None)
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, revision=args.revision, overrides={"data_file": args.file})
    except ConfigError as ex:
        print(f"::error::{ex}")
        return 2

    try:
        entries = read_entries_strict(config.data_file)
    except ValueError as ex:
        print(f"::error::{ex}")
        return 1

    errors = validate_entries(entries, config)
    if errors:
        for e in errors:
            print(f"::error::{e}")
        return 1

    print(f"::notice::Validation passed for {config.data_file}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
