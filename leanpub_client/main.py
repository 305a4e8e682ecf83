"""
Leanpub Book Configuration Fetcher

A CLI tool that retrieves a Leanpub book's configuration metadata and prints
it as formatted JSON.
"""

import argparse
import logging
import sys
import traceback
from typing import Any, List, Optional

from . import __version__
from .config import Config
from .leanpub_client import LeanpubClient
from .utils import format_error_chain, pretty_json, redact_api_key

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CLEAN_FORMAT = "%(levelname)s - %(message)s"


class RedactingFilter(logging.Filter):
    """Masks api_key values in formatted log messages, including third-party ones"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_api_key(message)
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True


def setup_logging(
    verbose: bool = False, level: str = "ERROR", log_file: Optional[str] = None
) -> None:
    """Setup logging; the console handler writes to stderr so stdout stays pure JSON"""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    if verbose:
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
    else:
        console_handler.setLevel(getattr(logging, level.upper(), logging.ERROR))
        console_handler.setFormatter(logging.Formatter(CLEAN_FORMAT))
    console_handler.addFilter(RedactingFilter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
        file_handler.addFilter(RedactingFilter())
        root_logger.addHandler(file_handler)

    # Suppress chatty third-party loggers unless in verbose mode
    if not verbose:
        logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)
        logging.getLogger("requests").setLevel(logging.WARNING)


class CLIArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1"""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"error: {message}\n")


def non_empty_slug(value: str) -> str:
    slug = value.strip().strip("/")
    if not slug:
        raise argparse.ArgumentTypeError("book slug must not be empty")
    return slug


def build_parser() -> argparse.ArgumentParser:
    parser = CLIArgumentParser(
        prog="leanpub-client",
        description="Leanpub Book Configuration Fetcher",
    )

    parser.add_argument(
        "slug",
        type=non_empty_slug,
        help="Book slug (the part after https://leanpub.com/ in the URL)",
    )

    parser.add_argument(
        "--legacy",
        action="store_true",
        help="Only query the public book endpoint (no API key in the URL)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print debugging info (status, headers, raw body snippet) on failures",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def run(slug: str, config: Config, legacy: bool = False, debug: bool = False) -> Any:
    """Fetch a book's configuration using explicit configuration"""
    logger = logging.getLogger(__name__)
    logger.info(f"Fetching configuration for book '{slug}' (legacy={legacy})")

    with LeanpubClient(
        config.API_KEY, base_url=config.BASE_URL, timeout=config.TIMEOUT, debug=debug
    ) as client:
        return client.fetch_book_config(slug, legacy=legacy)


def fail(error: BaseException) -> None:
    print(f"error: {format_error_chain(error)}", file=sys.stderr)
    sys.exit(1)


def main(argv: Optional[List[str]] = None, config: Optional[Config] = None) -> None:
    """Main CLI entry point"""
    args = build_parser().parse_args(argv)

    # Setup logging first
    setup_logging(verbose=args.verbose)
    logger = logging.getLogger(__name__)

    try:
        if config is None:
            config = Config()
        if config.LOG_FILE or config.LOG_LEVEL != "ERROR":
            setup_logging(verbose=args.verbose, level=config.LOG_LEVEL, log_file=config.LOG_FILE)
        logger.debug(str(config))

        result = run(args.slug, config, legacy=args.legacy, debug=args.debug)
        print(pretty_json(result))

    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        print("error: interrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        if args.verbose:
            logger.debug("Full error details:\n" + redact_api_key(traceback.format_exc()))
        fail(e)
