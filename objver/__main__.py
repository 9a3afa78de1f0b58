"""
CLI entry point for objver.

Resolves settings, confirms bucket versioning is enabled, runs one command
and maps failures to exit codes. Nothing below this module exits the process.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config.settings import DEFAULT_ENV_FILE, ObjverSettings, load_settings
from .core.exceptions import LocalIOError, ObjverError
from .utils.logging import setup_logging
from .versions.listing import render_objects, render_versions
from .versions.service import VersionService

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def create_service(settings: ObjverSettings) -> VersionService:
    return VersionService(settings)


def _print_lines(lines: List[str]) -> None:
    for line in lines:
        print(line)


def _write_output(path: Optional[str], content: bytes) -> None:
    if path is None:
        sys.stdout.buffer.write(content)
        sys.stdout.buffer.flush()
        return
    try:
        Path(path).write_bytes(content)
    except OSError as e:
        raise LocalIOError(path, e.strerror or str(e)) from e


async def run_command(args: argparse.Namespace, service: VersionService) -> None:
    """
    Run the selected command against the service and print its output.

    Args:
        args: Parsed command-line arguments
        service: Version service bound to the configured bucket
    """
    await service.ensure_versioning_enabled()

    if args.command == "list-files":
        _print_lines(render_objects(await service.list_files()))

    elif args.command == "ls":
        prefix = args.prefix_option if args.prefix_option is not None else args.prefix
        _print_lines(render_objects(await service.list_files(prefix=prefix or "")))

    elif args.command == "list-versions":
        _print_lines(render_versions(await service.list_versions(args.name)))

    elif args.command == "put-version":
        result = await service.put_version(args.name, args.file_path)
        print(f"put version: {result.version_id}")

    elif args.command == "get-version":
        content = await service.get_version(args.name, args.version)
        _write_output(args.output, content)
        if args.output is not None:
            print(f"get version: {args.version} ({len(content)} bytes) -> {args.output}")

    elif args.command == "delete-version":
        result = await service.delete_version(args.name, args.version)
        marker = " (delete marker)" if result.delete_marker else ""
        print(f"delete result: {result.key} {result.version_id or args.version}{marker}")

    elif args.command == "copy-object":
        result = await service.copy_object(args.source, args.dest, source_version_id=args.source_version)
        print(f"copy result: {result.source_key} -> {result.dest_key} (version {result.version_id or 'unversioned'})")

    else:
        raise ObjverError(f"Unknown command: {args.command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="objver",
        description="Manage versioned objects in an S3-compatible object store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration is read from BUCKET_NAME, ACCESS_KEY, SECRET_KEY, REGION and
ENDPOINT (optionally from a .env file).

Examples:
  objver list-files
  objver ls --prefix reports/
  objver list-versions report.pdf
  objver put-version report.pdf ./report.pdf
  objver delete-version report.pdf 3HL4kqtJlcpXroDTDmJ
  objver copy-object report.pdf archive/report.pdf
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--bucket", "-b", help="Bucket name (overrides BUCKET_NAME)")
    parser.add_argument("--env-file", default=str(DEFAULT_ENV_FILE), help="Env file to load (default: .env)")
    parser.add_argument("--config", "-c", help="YAML configuration file")
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level (overrides LOG_LEVEL)"
    )
    parser.add_argument("--json-logs", action="store_true", default=None, help="Emit JSON logs on stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("list-files", help="List all objects in the bucket")

    ls_parser = subparsers.add_parser("ls", help="List objects under a key prefix")
    ls_parser.add_argument("prefix", nargs="?", default="", help="Key prefix")
    ls_parser.add_argument("--prefix", "-p", dest="prefix_option", help="Key prefix")

    versions_parser = subparsers.add_parser("list-versions", help="List all versions of a key")
    versions_parser.add_argument("name", help="Object key")

    put_parser = subparsers.add_parser("put-version", help="Upload a file as a new version unless already stored")
    put_parser.add_argument("name", help="Object key")
    put_parser.add_argument("file_path", help="Local file to upload")

    get_parser = subparsers.add_parser("get-version", help="Download a specific version")
    get_parser.add_argument("name", help="Object key")
    get_parser.add_argument("version", help="Version id")
    get_parser.add_argument("--output", "-o", help="Write to this file instead of stdout")

    delete_parser = subparsers.add_parser("delete-version", help="Delete a specific version")
    delete_parser.add_argument("name", help="Object key")
    delete_parser.add_argument("version", help="Version id")

    copy_parser = subparsers.add_parser("copy-object", help="Copy an object within the bucket")
    copy_parser.add_argument("source", help="Source key")
    copy_parser.add_argument("dest", help="Destination key")
    copy_parser.add_argument("--source-version", help="Source version id (default: latest)")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        print("no command specified", file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    try:
        settings = load_settings(
            env_file=Path(args.env_file) if args.env_file else None,
            config_file=Path(args.config) if args.config else None,
            bucket_name=args.bucket,
            log_level=args.log_level,
            json_logs=args.json_logs,
        )
        setup_logging(settings.log_level, settings.json_logs)
        logger.debug(f"Running {args.command} against bucket {settings.bucket_name} at {settings.endpoint}")

        asyncio.run(run_command(args, create_service(settings)))

    except ObjverError as e:
        print(str(e), file=sys.stderr)
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
