#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Steam news → intel-data.json sync

One pass: load the existing intel file, fetch the app's Steam news,
drop unrelated items, turn the rest into intel entries, add the ones
whose id is not known yet, sort by startDate (newest first), write back.

- Hand-written entries (id without the "steam-" prefix) are never touched
- A Steam outage or bad response means "nothing new", never an emptied file
- Exit 0 on success (also when Steam was unreachable), 1 on any other failure
- CLI: --file, --config, --revision, --app-id, --count, --maxlength, --timeout,
  --filter/--no-filter, --dry-run, --status-json
"""

import argparse
import json
import sys
import traceback

from intel_sync.config import ConfigError, load_config
from intel_sync.pipeline import run_sync


def build_parser():
    parser = argparse.ArgumentParser(description="Steam news → intel-data.json sync")
    parser.add_argument("--file", default=None, help="Intel JSON file to merge into (env INTEL_DATA_FILE).")
    parser.add_argument("--config", default=None, help="YAML config file (default config/intel_sync.yaml if present).")
    parser.add_argument("--revision", type=int, choices=[1, 2], default=None,
                        help="Behaviour preset: 1 = original script, 2 = corrected (default).")
    parser.add_argument("--app-id", default=None, help="Steam app id (env STEAM_APP_ID).")
    parser.add_argument("--count", type=int, default=None, help="Number of news items to request.")
    parser.add_argument("--maxlength", type=int, default=None, help="Per-item content length requested from Steam.")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout seconds (env REQUEST_TIMEOUT).")
    flt = parser.add_mutually_exclusive_group()
    flt.add_argument("--filter", dest="filter_enabled", action="store_true", default=None,
                     help="Keep only items about the tracked game.")
    flt.add_argument("--no-filter", dest="filter_enabled", action="store_false", default=None,
                     help="Accept every fetched item.")
    parser.add_argument("--dry-run", action="store_true", help="Do everything except writing the file.")
    parser.add_argument("--status-json", action="store_true", help="Print the run status as JSON at the end.")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    overrides = {
        "data_file": args.file,
        "app_id": args.app_id,
        "news_count": args.count,
        "max_length": args.maxlength,
        "request_timeout": args.timeout,
        "filter_enabled": args.filter_enabled,
    }
    try:
        config = load_config(args.config, revision=args.revision, overrides=overrides)
    except ConfigError as e:
        print(f"[FATAL] Bad configuration: {e}", file=sys.stderr)
        return 2

    try:
        status = run_sync(config, dry_run=args.dry_run)
    except Exception as e:
        print(f"[FATAL] Unexpected error: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1

    if args.status_json:
        print(json.dumps(status, indent=2, ensure_ascii=False))
    return 0

if __name__ == "__main__":
    sys.exit(main())
