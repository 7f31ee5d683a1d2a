#!/usr/bin/env python3
"""
climatedash server entry point

Loads the YAML config, configures logging and serves the dashboard with
uvicorn. The background poller starts with the app.
"""

import argparse
import logging

import uvicorn

from .core.config import load_config_from
from .core.server import create_app


def main():
    """Main entry point for climatedash."""
    parser = argparse.ArgumentParser(description="climatedash server")
    parser.add_argument("-c", "--config", help="Path to YAML config", default="config.yaml")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="logging level (overrides config)")
    args = parser.parse_args()

    config = load_config_from(args.config)
    if args.log_level:
        config = config.model_copy(update={"log_level": args.log_level})

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("climatedash.server").info(
        f"climatedash starting: source={config.data_url}, interval={config.refresh_interval}s"
    )

    app = create_app(config)

    try:
        uvicorn.run(app, host=config.host, port=config.port, reload=False, access_log=False)
    except KeyboardInterrupt:
        print("\nInterrupted. Bye!")


if __name__ == "__main__":
    main()
