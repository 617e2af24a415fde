import argparse
import logging
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from codestats_readme.commit import make_committer
from codestats_readme.config import load_config
from codestats_readme.errors import ConfigError
from codestats_readme.pipeline import run

logger = logging.getLogger("codestats_readme")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="codestats-readme",
        description="Update the codestats section of a README with a Code::Stats language chart.",
    )
    parser.add_argument("--readme", help="document to update (overrides INPUT_README_FILE)")
    parser.add_argument("--width", type=int, help="bar width in characters (overrides INPUT_GRAPH_WIDTH)")
    parser.add_argument("--no-commit", action="store_true", help="write the README but do not commit or push")
    parser.add_argument("--debug", action="store_true", help="verbose logging (same as INPUT_DEBUG)")
    return parser.parse_args(argv)


def setup_logging(debug: bool) -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s - %(levelname)s - %(message)s",
        )
    else:
        logging.getLogger().setLevel(logging.DEBUG if debug else logging.INFO)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    load_dotenv(find_dotenv(usecwd=True))
    try:
        config = load_config()
    except ConfigError as e:
        setup_logging(args.debug)
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    config = config.with_overrides(
        readme_file=args.readme,
        graph_width=args.width if args.width and args.width > 0 else None,
        commit=False if args.no_commit else None,
        debug=True if args.debug else None,
    )
    setup_logging(config.debug)
    logger.debug("Configuration: %s", config)

    ok = run(config, committer=make_committer(config))
    if not ok:
        logger.warning("README not updated")
    return 0


if __name__ == "__main__":
    sys.exit(main())
