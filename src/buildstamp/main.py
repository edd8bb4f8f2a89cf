"""Command-line driver that prints resolved versions and build properties."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as distribution_version
from pathlib import Path
import sys

from buildstamp.cli.helpers import render_mapping, render_value
from buildstamp.clock import Clock
from buildstamp.config.env import commit_sha_short, load_environment
from buildstamp.config.settings import load_settings
from buildstamp.constants import DEFAULT_BASE_VERSION, DEFAULT_CONFIG_PATH
from buildstamp.enums import OutputFormat
from buildstamp.errors import ConfigurationError
from buildstamp.shell.executor import ShellExecutor
from buildstamp.stamping import build_properties, create_build_stamp, manifest_attributes
from buildstamp.utilities.logger_manager import LoggerConfig, LoggerManager

EXIT_CONFIG_ERROR = 2


def _package_version() -> str:
    try:
        return distribution_version("buildstamp")
    except PackageNotFoundError:
        return DEFAULT_BASE_VERSION


def _config_path(explicit: str | None) -> Path | None:
    """Explicit paths are always used; the default file only when it exists."""
    if explicit is not None:
        return Path(explicit)
    default = Path(DEFAULT_CONFIG_PATH)
    return default if default.exists() else None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="buildstamp",
        description="Resolve plugin versions and build identifiers from git.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=_package_version(),
        help="Show the buildstamp version and exit.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Build configuration file (YAML); {DEFAULT_CONFIG_PATH} is read if present.",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Optional .env file seeding environment overrides.",
    )
    parser.add_argument(
        "--repo",
        dest="repo_root",
        default=None,
        help="Repository root to query (defaults to the config or cwd).",
    )
    parser.add_argument(
        "--base-version",
        default=None,
        help="Fallback version when git metadata is unavailable.",
    )
    parser.add_argument(
        "--local-version",
        dest="override_version",
        default=None,
        help="Explicit version that bypasses git entirely.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity on stderr.",
    )
    parser.add_argument(
        "--structured-logs",
        action="store_true",
        help="Emit log records as JSON lines.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("version", "Print the resolved version."),
        ("build-id", "Print the build identifier."),
        ("properties", "Print build properties for resource templating."),
        ("manifest", "Print jar manifest attributes."),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--json",
            dest="output_format",
            action="store_const",
            const=OutputFormat.JSON,
            default=OutputFormat.TEXT,
            help="Render output as JSON.",
        )
    return parser.parse_args(argv)


def main(
    argv: list[str] | None = None,
    executor: ShellExecutor | None = None,
    clock: Clock | None = None,
) -> int:
    """Entry point returning a process exit status."""
    args = parse_args(argv)
    logger_manager = LoggerManager(
        LoggerConfig(log_level=args.log_level, structured_logging=args.structured_logs)
    )
    logger = logger_manager.get_logger()
    try:
        load_environment(args.env_file)
        try:
            settings = load_settings(
                _config_path(args.config),
                base_version=args.base_version,
                override_version=args.override_version,
                repo_root=args.repo_root,
            )
        except ConfigurationError as exc:
            logger.error("Configuration error: %s", exc)
            print(f"buildstamp: {exc}", file=sys.stderr)
            return EXIT_CONFIG_ERROR

        with logger_manager.context(command=args.command) as log:
            log.info("Stamping build in %s", settings.repo_root)
            stamp = create_build_stamp(settings, executor, clock)

        output_format: OutputFormat = args.output_format
        if args.command == "version":
            output = render_value(stamp.version.value, "version", stamp, output_format)
        elif args.command == "build-id":
            output = render_value(stamp.build_id.value, "build_id", stamp, output_format)
        elif args.command == "properties":
            output = render_mapping(build_properties(settings, stamp), output_format)
        else:
            attributes = manifest_attributes(settings, stamp, commit_sha_short())
            output = render_mapping(attributes, output_format)
        print(output)
        return 0
    finally:
        logger_manager.close()


def run() -> None:
    """Console-script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
