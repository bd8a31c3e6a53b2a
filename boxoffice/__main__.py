"""Command line entry point. Allows `python -m boxoffice`."""

import argparse
import sys
from datetime import timedelta
from pathlib import Path


def run_init_db() -> None:
    """Create the database tables."""
    from boxoffice.database import init_database

    init_database()
    print("Database tables created")


def run_ingest(data_dir: Path | None) -> int:
    """Ingest collected YAML batches.

    Returns:
        Exit code: 0 on success, 2 when the run was skipped.
    """
    from boxoffice.database import init_database
    from boxoffice.etl.pipeline import IngestionPipeline

    init_database()
    stats = IngestionPipeline().run(data_dir)
    if stats is None:
        print("Another ingestion holds the lock, skipped")
        return 2

    print(
        f"{stats.files} files, {stats.records} records: "
        f"{stats.loader.inserted} inserted, {stats.loader.skipped} duplicates, "
        f"{stats.skipped} skipped, {stats.loader.errors} errors "
        f"({stats.loader.success_rate}% written)"
    )
    for source, count in sorted(stats.per_source.items()):
        print(f"  - {source}: {count}")
    return 0


def run_metrics(output: Path | None) -> None:
    """Print or save the metrics payload as JSON."""
    from boxoffice.database import MovieRepository, session_scope
    from boxoffice.etl.aggregation import build_metrics
    from boxoffice.settings import settings

    with session_scope() as session:
        rows = MovieRepository(session).fetch_metric_rows()

    payload = build_metrics(rows, top_n=settings.etl.top_movies_limit)
    document = payload.model_dump_json(by_alias=True, indent=2)

    if output is None:
        print(document)
        return
    output.write_text(document + "\n", encoding="utf-8")
    print(f"Metrics written to {output}")


def run_cleanup_locks() -> None:
    """Remove stale scheduler locks."""
    from boxoffice.database import SchedulerLockRepository, session_scope
    from boxoffice.settings import settings

    timeout = timedelta(seconds=settings.etl.lock_timeout_seconds)
    with session_scope() as session:
        removed = SchedulerLockRepository(session).cleanup_stale(timeout)
    print(f"{removed} stale locks removed")


def run_api() -> None:
    """Start the metrics API."""
    from boxoffice.api.main import run_server

    print("Starting metrics API...")
    run_server()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="boxoffice",
        description="Box-office metrics: ingestion and dashboard API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m boxoffice init-db                    # Create tables
  python -m boxoffice ingest --data-dir data     # Load YAML batches
  python -m boxoffice metrics --output out.json  # Export metrics
  python -m boxoffice cleanup-locks              # Drop stale locks
  python -m boxoffice serve                      # Metrics API
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    subparsers.add_parser("init-db", help="Create database tables")

    ingest_parser = subparsers.add_parser("ingest", help="Ingest YAML batches")
    ingest_parser.add_argument("--data-dir", type=Path, default=None)

    metrics_parser = subparsers.add_parser("metrics", help="Export metrics as JSON")
    metrics_parser.add_argument("--output", type=Path, default=None)

    subparsers.add_parser("cleanup-locks", help="Remove stale scheduler locks")
    subparsers.add_parser("serve", help="Run the metrics API")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    exit_code = 0
    try:
        if args.command == "init-db":
            run_init_db()
        elif args.command == "ingest":
            exit_code = run_ingest(args.data_dir)
        elif args.command == "metrics":
            run_metrics(args.output)
        elif args.command == "cleanup-locks":
            run_cleanup_locks()
        elif args.command == "serve":
            run_api()

    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)
    except Exception as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
