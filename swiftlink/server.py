import argparse
import sys

import uvicorn

from swiftlink.core.config import load_settings
from swiftlink.core.logging_config import configure_logging
from swiftlink.main import create_app


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="swiftlink-server", description="Run the swiftlink short link server")
    parser.add_argument("-c", "--config", help="Path to the TOML configuration file")
    parser.add_argument("-l", "--log-level", default="INFO", help="Log level (default: INFO)")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logger = configure_logging(args.log_level)

    settings = load_settings(args.config)
    try:
        app = create_app(settings)
    except Exception:
        logger.exception("Failed to initialize database")
        return 1

    logger.info(f"Starting server on port {settings.base.port}")
    uvicorn.run(app, host=args.host, port=settings.base.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
