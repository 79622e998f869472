"""Entry point for diagnosing a test failure from the command line.

Reads an error message (argument or stdin), runs the diagnosis engine and
prints the result as JSON on stdout. Logs go to stderr.

Example:
    failure-diagnosis "TimeoutError: locator.click: Timeout 30000ms exceeded"
    npx playwright test 2>&1 | failure-diagnosis --stdin --file tests/login.spec.ts
"""

import argparse
import json
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from failure_diagnosis._version import __version__

log = structlog.get_logger()


def setup_logging(
    debug: bool = False,
    log_format: str = "console",
) -> None:
    """Configure structured logging with secret sanitization.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
    """
    from failure_diagnosis.utils.logging import LogFormat, LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.WARNING

    configure_logging(
        level=level,
        log_format=LogFormat(log_format.lower()),
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="failure-diagnosis",
        description="Classify a test failure and suggest fixes",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "message",
        nargs="?",
        help="Error message to diagnose (omit with --stdin)",
    )

    parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read the error message from standard input",
    )

    parser.add_argument(
        "-f",
        "--file",
        dest="file_path",
        help="Source file involved in the failure",
    )

    parser.add_argument(
        "--context",
        help="Additional text scanned for related files",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Diagnose the message described by args and print the result.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    from failure_diagnosis.config.loader import find_config_file, load_config
    from failure_diagnosis.config.schema import DiagnosisConfig
    from failure_diagnosis.core.engine import DiagnosisEngine
    from failure_diagnosis.utils.logging import diagnosis_context

    config_path = args.config if args.config is not None else find_config_file()

    try:
        if config_path is not None:
            config = load_config(config_path)

            if not args.debug:
                from failure_diagnosis.utils.logging import configure_logging

                configure_logging(
                    level=config.logging.level,
                    log_format=config.logging.format,
                    file_path=config.logging.file.path if config.logging.file.enabled else None,
                )
        else:
            config = DiagnosisConfig()
    except FileNotFoundError as e:
        log.error("configuration_file_not_found", path=str(config_path), error=str(e))
        return 1
    except (ValueError, ValidationError) as e:
        log.error("configuration_invalid", error=str(e))
        return 1

    message = sys.stdin.read() if args.stdin else args.message
    if not message:
        log.error("no_error_message", hint="pass a message or use --stdin")
        return 1

    engine = DiagnosisEngine(config.analysis)
    with diagnosis_context(source="stdin" if args.stdin else "argv", file_path=args.file_path):
        result = engine.classify(message, file_path=args.file_path, context=args.context)

    print(json.dumps(result.to_dict(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_format=args.log_format)

    try:
        return run(args)
    except KeyboardInterrupt:
        log.info("interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
