# File: src/eth_explorer/monitoring/logging_config.py

import logging
import logging.handlers
import os
from datetime import datetime
from typing import Optional

from ..utils.logger import LOG_FORMAT


class LogConfig:
    def __init__(
        self,
        level: int = logging.INFO,
        log_dir: Optional[str] = None,
        max_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5
    ):
        self.level = level
        self.log_dir = log_dir
        self.max_size = max_size
        self.backup_count = backup_count

        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

    def setup_logging(self):
        console_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(self.level)

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG if self.log_dir else self.level)
        root_logger.addHandler(console_handler)

        if self.log_dir:
            log_file = os.path.join(
                self.log_dir,
                f'eth_explorer_{datetime.now().strftime("%Y%m%d")}.log'
            )
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=self.max_size,
                backupCount=self.backup_count
            )
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            file_handler.setLevel(logging.DEBUG)
            root_logger.addHandler(file_handler)

        # web3 logs every provider request at DEBUG
        logging.getLogger("web3").setLevel(max(self.level, logging.INFO))
