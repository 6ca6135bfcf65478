"""
Run property ETL pipelines from the command line.

Examples:
    python scripts/run_etl.py --init-db
    python scripts/run_etl.py --sources attom corelogic --timeout 900
    python scripts/run_etl.py --concurrent --export data/properties.geojson --format geojson
    python scripts/run_etl.py --status
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

# Add parent directory to Python path
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from config.settings import settings
from src.property_etl.db.repository import PropertyRepository
from src.property_etl.db.session import close_connections, create_all_tables, get_db_session, health_check
from src.property_etl.etl.exporters import SUPPORTED_FORMATS, export_properties, from_rows
from src.property_etl.pipelines.sources import build_default_manager
from src.property_etl.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract, normalize and load property data from registered sources.")
    parser.add_argument("--sources", nargs="+", metavar="NAME", help="Only run these sources (default: all registered).")
    parser.add_argument("--concurrent", action="store_true", help="Run sources in parallel instead of one after another.")
    parser.add_argument("--timeout", type=float, default=settings.etl_run_timeout_seconds, help="Cancel runs still going after this many seconds.")
    parser.add_argument("--init-db", action="store_true", help="Create the properties table before running.")
    parser.add_argument("--export", dest="export_path", help="Write stored properties to this file after the run.")
    parser.add_argument("--format", dest="export_format", choices=SUPPORTED_FORMATS, default="json", help="Export format.")
    parser.add_argument("--status", action="store_true", help="Print registered sources and exit without running.")
    return parser.parse_args(argv)


def export_stored_properties(path: Path, fmt: str) -> int:
    """Export every stored property; returns the number written."""
    repository = PropertyRepository()
    with get_db_session() as session:
        properties = from_rows(repository.get_all(session))

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_properties(properties, fmt))
    logger.info("properties_exported", path=str(path), format=fmt, count=len(properties))
    return len(properties)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging()

    if args.init_db:
        create_all_tables()

    manager = build_default_manager()

    if args.status:
        print(json.dumps({"database_healthy": health_check(), "pipelines": manager.get_pipeline_status()}, indent=2))
        return 0

    if args.sources:
        unknown = sorted(set(args.sources) - set(manager.registered_sources()))
        if unknown:
            logger.error("unknown_sources", sources=unknown, registered=manager.registered_sources())
            return 2
        for name in manager.registered_sources():
            if name not in args.sources:
                manager.unregister_pipeline(name)

    results = manager.run_all_pipelines(concurrent=args.concurrent, timeout=args.timeout)
    print(json.dumps([result.to_dict() for result in results], indent=2))

    if args.export_path:
        count = export_stored_properties(Path(args.export_path), args.export_format)
        print(f"\nExported {count} properties to {args.export_path}")

    return 0 if all(result.success for result in results) else 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    finally:
        close_connections()
