"""CLI entry point for the forecast calendar publisher."""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from weathercal.config.loader import apply_overrides, get_config_value, load_config
from weathercal.config.schema import AppConfig
from weathercal.pipeline.publish_pipeline import PublishPipeline

DEFAULT_CONFIG = "weathercal.yaml"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weathercal",
        description="Publish an NWS forecast as an iCalendar feed",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # publish
    publish_p = sub.add_parser("publish", help="Fetch the forecast and replace the feed")
    publish_p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the calendar instead of replacing the published file",
    )
    publish_p.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a config value, e.g. calendar.domain=example.org",
    )

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display effective config")
    get_p = config_sub.add_parser("get", help="Display one config value")
    get_p.add_argument("key", help="Dotted key, e.g. output.filename")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    try:
        config = load_config(args.config)
        if args.command == "publish":
            config = apply_overrides(config, args.overrides)
    except (ValidationError, ValueError, KeyError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    if args.command == "publish":
        return _cmd_publish(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_publish(config: AppConfig, args) -> int:
    file_handler = _attach_log_file(config)
    try:
        pipeline = PublishPipeline(config, dry_run=args.dry_run)
        summary = pipeline.run()
        if args.dry_run and pipeline.document is not None:
            sys.stdout.write(pipeline.document)
        return 0 if not summary.errors else 1
    finally:
        if file_handler is not None:
            logging.getLogger().removeHandler(file_handler)
            file_handler.close()


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except KeyError as e:
            print(f"Error: {e}")
            return 1
        if hasattr(value, "model_dump_json"):
            print(value.model_dump_json(indent=2))
        else:
            print(value)
        return 0
    else:
        print("Use: config show | config get KEY")
        return 1


def _attach_log_file(config: AppConfig) -> logging.Handler | None:
    """Apply the configured log level and append log lines to ops.log_file."""
    root_logger = logging.getLogger()
    root_logger.setLevel(config.ops.log_level.value)
    if not config.ops.log_file:
        return None

    log_path = Path(config.ops.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(file_handler)
    return file_handler
