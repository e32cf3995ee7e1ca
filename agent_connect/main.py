#!/usr/bin/env python3
"""Command line entrypoint: compile an agent configuration and connect."""

import argparse
import json
import logging
import sys
from os import environ
from pathlib import Path
from typing import Any, TypeVar, cast

import requests
import yaml
from pydantic import ValidationError

from agent_connect.collector_client import CollectorClient
from agent_connect.compiler import compile_config
from agent_connect.settings import AgentConfig
from agent_connect.validation import ConfigValidationError


class Args(argparse.Namespace):
    config: Path | None
    app_name: str | None
    license_key: str | None
    host: str | None
    host_display_name: str | None
    high_security: bool
    log_level: str
    rich_logs: bool
    print_payload_and_exit: bool


logger = logging.getLogger(__name__)


def parse_args() -> Args:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Agent connect payload compiler",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML agent configuration file",
    )

    # Configuration overrides (optional when using config file)
    parser.add_argument(
        "--app-name",
        help="Application name, use ';' to report to rollup applications. Also accepted in the NEW_RELIC_APP_NAME envvar.",
    )

    parser.add_argument(
        "--license-key",
        help="License key. Also accepted in the NEW_RELIC_LICENSE_KEY envvar.",
    )

    parser.add_argument(
        "--host",
        help="Collector host override. Also accepted in the NEW_RELIC_HOST envvar.",
    )

    parser.add_argument(
        "--host-display-name",
        help="Host name shown in the UI instead of the resolved host name",
    )

    parser.add_argument(
        "--high-security",
        action="store_true",
        help="Enable high security mode",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set the logging level",
    )

    parser.add_argument(
        "--rich-logs",
        action="store_true",
        help="Enable rich colored logging output",
    )

    parser.add_argument(
        "--print-payload-and-exit",
        action="store_true",
        help="Print the connect payload as JSON and exit without contacting the collector",
    )

    return cast(Args, parser.parse_args())


def configure_logging(log_level: str, use_rich: bool = False) -> None:
    """Configure logging with optional rich formatting.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        use_rich: Whether to use rich colored logging
    """
    if use_rich:
        from rich.console import Console
        from rich.logging import RichHandler

        # log to stderr, stdout is reserved for the payload
        console = Console(stderr=True)

        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(message)s",
            datefmt="[%X]",
            handlers=[
                RichHandler(
                    console=console,
                    show_path=True,
                    show_time=True,
                    show_level=True,
                    markup=True,
                    rich_tracebacks=True,
                )
            ],
        )
    else:
        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(asctime)s [%(name)s:%(filename)s:%(lineno)d] %(levelname)s: %(message)s",
        )

    # silence libs logging
    logging.getLogger("urllib3").setLevel(logging.WARNING)


T = TypeVar("T")


def first_not_none(*values: T | None) -> T | None:
    for v in values:
        if v is not None:
            return v
    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML configuration file, an empty file yields an empty dict."""
    logger.info("Loading configuration from %s", path)
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def build_config(args: Args, config_dict: dict[str, Any]) -> AgentConfig:
    """Merge CLI arguments, environment and file values into a configuration.

    Precedence is CLI argument, then environment variable, then file.
    """
    overrides = {
        "app_name": first_not_none(
            args.app_name,
            environ.get("NEW_RELIC_APP_NAME"),
            config_dict.get("app_name"),
        ),
        "license_key": first_not_none(
            args.license_key,
            environ.get("NEW_RELIC_LICENSE_KEY"),
            config_dict.get("license_key"),
        ),
        "host": first_not_none(
            args.host, environ.get("NEW_RELIC_HOST"), config_dict.get("host")
        ),
        "host_display_name": first_not_none(
            args.host_display_name, config_dict.get("host_display_name")
        ),
        "high_security": first_not_none(
            True if args.high_security is True else None,
            config_dict.get("high_security"),
        ),
    }
    merged = dict(config_dict)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return AgentConfig.model_validate(merged)


def main() -> int:
    """Main function."""
    args = parse_args()

    configure_logging(args.log_level, args.rich_logs)

    try:
        config_dict: dict[str, Any] = {}
        if args.config:
            config_dict = load_config_file(args.config)

        config = build_config(args, config_dict)
        compiled = compile_config(config)

        host = compiled.preconnect_host()
        logger.info("Using preconnect host %s", host)

        payload = compiled.create_connect_payload()

        if args.print_payload_and_exit:
            logger.info("Printing connect payload")
            print(json.dumps(json.loads(payload), indent=2))
            return 0

        client = CollectorClient(
            host=host,
            license_key=compiled.config.license_key,
            transport=compiled.config.transport,
        )
        client.invoke("connect", payload)

    except ValidationError as e:
        logger.error(
            "Invalid config\n"
            + "\n".join(
                [
                    f"{'.'.join([str(loc) for loc in err['loc']])}: {err['msg']} (got {err['input']})"
                    for err in e.errors()
                ]
            )
        )
        return 1
    except ConfigValidationError as e:
        logger.error("Invalid config: %s", e)
        return 1
    except requests.RequestException as e:
        logger.error("Connect request failed: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Stopped by user")
        return 0
    except Exception as e:
        logger.error("Error compiling connect payload: %s", e, exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
