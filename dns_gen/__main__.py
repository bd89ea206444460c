import argparse
import asyncio
import sys

from pydantic import ValidationError

from .config import Config
from .errors import ConfigError
from .lifecycle import Lifecycle, validate
from .logger import logger, setup_logging

DESCRIPTION = "Render template or execute commands based on DNS updates"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dns-gen", description=DESCRIPTION)
    parser.add_argument(
        "-inter", "--interval", help="interval for DNS queries, e.g. 5s (default: 5s)"
    )
    parser.add_argument(
        "-exec", "--execute", help="command to execute when a change is detected"
    )
    parser.add_argument(
        "-tmpl",
        "--template",
        help="if not empty, render this template to [dest | stdout]",
    )
    parser.add_argument(
        "-dest", "--dest", help="if tmpl is provided, it will be rendered to dest"
    )
    parser.add_argument("--tmp-dir", help="directory for temporary output files")
    parser.add_argument(
        "-debug",
        "--debug",
        action="store_true",
        default=None,
        help="enable debug logging",
    )
    parser.add_argument(
        "hostnames",
        nargs="*",
        metavar="hostname",
        help="(required) one or more hostnames to watch for updates",
    )
    return parser


def load_config(args: argparse.Namespace) -> Config:
    # only pass what was given, so the environment and the yaml file still apply
    overrides = {
        key: value
        for key, value in vars(args).items()
        if value is not None and value != []
    }
    return Config(**overrides)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ValidationError as e:
        logger.error(f"invalid configuration: {e}")
        return 1
    setup_logging(config.debug)

    try:
        validate(config)
    except ConfigError as e:
        logger.error(str(e))
        if not config.hostnames:
            parser.print_help()
        return 1

    return asyncio.run(Lifecycle(config).run())


if __name__ == "__main__":
    sys.exit(main())
