# src/eth_explorer/cli/cli.py
import argparse
import json
import sys
from typing import List, Optional

import uvicorn

from ..api.server import create_app
from ..config.settings import AppConfig, load_config, redact_url
from ..exceptions import ConfigurationError
from ..monitoring.logging_config import LogConfig
from ..utils.logger import get_logger, parse_level


class CLI:
    def __init__(self):
        self.config: Optional[AppConfig] = None

    def main(self, args: List[str]) -> int:
        parser = self.create_parser()
        args = parser.parse_args(args)

        if not hasattr(args, 'func'):
            parser.print_help()
            return 1

        self.config = load_config(args.config)
        return args.func(args) or 0

    def create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Ethereum explorer API')
        parser.add_argument('--config', help='YAML config file (overrides CONFIG_FILE)')
        subparsers = parser.add_subparsers(title='commands', dest='command')

        serve = subparsers.add_parser('serve', help='Run the HTTP API')
        serve.add_argument('--host', help='Listen address (overrides HOST)')
        serve.add_argument('--port', type=int, help='Listen port (overrides PORT)')
        serve.add_argument('--log-level', help='Log level (overrides LOG_LEVEL)')
        serve.set_defaults(func=self.serve)

        show = subparsers.add_parser('config', help='Print the effective configuration')
        show.set_defaults(func=self.show_config)

        return parser

    def serve(self, args) -> int:
        if args.host:
            self.config.update("server.host", args.host)
        if args.port:
            self.config.update("server.port", args.port)
        if args.log_level:
            self.config.update("logging.level", args.log_level)

        level = parse_level(self.config.get("logging.level"))
        LogConfig(level=level, log_dir=self.config.get("logging.dir")).setup_logging()
        logger = get_logger(__name__)

        try:
            app = create_app(self.config)
        except ConfigurationError as e:
            logger.error("Cannot start: %s", e)
            return 2

        logger.info(
            "Starting server on %s:%d, node %s",
            self.config.host, self.config.port, redact_url(self.config.eth_node_url)
        )
        uvicorn.run(
            app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.get("logging.level").lower(),
        )
        return 0

    def show_config(self, args) -> int:
        print(json.dumps(self.config.masked(), indent=2))
        return 0


def main():
    cli = CLI()
    sys.exit(cli.main(sys.argv[1:]))


if __name__ == "__main__":
    main()
