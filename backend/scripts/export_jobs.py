#!/usr/bin/env python3
"""
Crawl one search and export the jobs to CSV.

Writes one row per job: title,link (no header), in crawl order.

Usage:
    cd backend
    python scripts/export_jobs.py golang
    python scripts/export_jobs.py "praca zdalna" --et 1 3 17 --output posts.csv
    python scripts/export_jobs.py praktykant --intern

Exit codes:
    0 - exported (possibly partial, failed pages are reported)
    1 - first results page could not be fetched
"""

import argparse
import csv
import os
import sys
from pathlib import Path
from typing import Iterable, Optional

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config.settings import settings
from crawler import ConfigError, CrawlEventType, EventCollector, FetchError, JobRecord, crawl_sync
from crawler.events import fan_out
from utils.crawl_logging import CrawlLogContext, LogComponent, configure_logging


class ExportLogContext(CrawlLogContext):
    """Crawl log context for command-line exports: [Export:query=X] message"""
    component = LogComponent.EXPORT


def write_csv(jobs: Iterable[JobRecord], path: Path) -> int:
    """
    Write jobs as title,link rows.

    Returns:
        Number of rows written
    """
    count = 0
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        for job in jobs:
            writer.writerow([job.title, job.link])
            count += 1
    return count


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Crawl a job search and export results to CSV")
    parser.add_argument('query', help="Search term, e.g. 'golang' or 'praca zdalna'")
    parser.add_argument('--intern', action='store_true', help="Legacy intern flag (implies default intern filter code)")
    parser.add_argument('--et', type=int, nargs='+', default=[], metavar='CODE', help="Explicit filter codes")
    parser.add_argument('--output', '-o', type=Path, default=Path('posts.csv'), help="CSV output path")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(settings.LOG_LEVEL)
    log = ExportLogContext(args.query)
    collector = EventCollector()

    try:
        result = crawl_sync(args.query, args.et, args.intern, sink=fan_out(log, collector))
    except (FetchError, ConfigError) as e:
        print(f"✗ Crawl failed: {e}", file=sys.stderr)
        return 1

    rows = write_csv(result.jobs, args.output)
    print(f"✓ Wrote {rows} jobs to {args.output}")
    if result.is_partial:
        print(f"⚠ Pages skipped after fetch failures: {result.failed_pages}")
    empty_pages = [event.page_number for event in collector.of_type(CrawlEventType.NO_CARDS_MATCHED)]
    if empty_pages:
        print(f"⚠ Pages with no job cards (markup change?): {empty_pages}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
