from __future__ import annotations

import argparse
import asyncio
import io
import logging
import os
import sys

from hello.fetch import DEFAULT_URL
from hello.fetch.config import CONFIG_ENV_VAR, URL_ENV_VAR, default_config_file_path, load_fetch_config, resolve_url
from hello.fetch.errors import FetchError
from hello.fetch.httpx.client import fetch_async
from hello.fetch.models import FetchRequest
from hello.fetch.output import COLORS, get_decorator, write_body
from hello.fetch.requests.client import fetch

logger = logging.getLogger("hello.fetch.cli")

BACKENDS = ["requests", "httpx"]


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hello-fetch",
        description="Fetch a single HTTPS URL and print the response body",
    )
    parser.add_argument(
        "url",
        metavar="URL",
        nargs="?",
        default=None,
        help=f"Absolute https URL to fetch (default: ${URL_ENV_VAR}, config file, then {DEFAULT_URL})",
    )
    parser.add_argument(
        "--color",
        choices=list(COLORS),
        default=None,
        help="Wrap the body in a terminal color (default: from config file, else none)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Network timeout in seconds (default: from config file, else the HTTP library default)",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default="requests",
        help="HTTP library to send the request with (default: requests)",
    )
    parser.add_argument(
        "--config-file-path",
        default=None,
        help=f"Config file path (default: ${CONFIG_ENV_VAR} or {default_config_file_path()})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable debug logging")
    return parser


def _configure_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logging.getLogger("hello.fetch").addHandler(handler)
    logging.getLogger("hello.fetch").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _discard_stdout() -> None:
    """Point stdout at devnull so the flush at interpreter exit does not raise again."""
    try:
        fileno = sys.stdout.fileno()
    except io.UnsupportedOperation:
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fileno)
    os.close(devnull)


def run(parsed: argparse.Namespace) -> int:
    try:
        config = load_fetch_config(parsed.config_file_path)
        url, source = resolve_url(config, parsed.url)
        logger.debug(f"Fetching {url} (from {source}) with {parsed.backend}")

        request = FetchRequest(url)
        timeout = parsed.timeout if parsed.timeout is not None else config.timeout
        decorator = get_decorator(parsed.color or config.color)

        if parsed.backend == "httpx":
            response = asyncio.run(fetch_async(request, timeout=timeout))
        else:
            response = fetch(request, timeout=timeout)

    except FetchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if response.is_redirect:
        logger.debug(f"Not following redirect to {response.location}")
    try:
        write_body(response.body, sys.stdout.buffer, decorator)
    except BrokenPipeError:
        logger.debug("stdout closed before the whole body was written")
        _discard_stdout()
        return 1
    return 0


def main(args: list[str] | None = None) -> int:
    parser = create_parser()
    parsed = parser.parse_args(args)
    _configure_logging(verbose=parsed.verbose)
    return run(parsed)


if __name__ == "__main__":
    sys.exit(main())
