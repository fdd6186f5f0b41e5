import logging
import os
from datetime import datetime
from logging import WARNING, FileHandler
from logging.handlers import TimedRotatingFileHandler


class GetLog:
    logger = None
    log_folder = None

    @classmethod
    def get_log(cls, level=logging.INFO, log_dir="./logs", shared_log_folder=None):
        """Get logger and initialize logging system.

        Args:
            level (int): Level for the main log file and the console
            log_dir (str): Parent directory of the per-run log folder
            shared_log_folder (str): Use this folder instead of a new timestamped one
        """
        if cls.logger is None:
            if shared_log_folder:
                cls.log_folder = shared_log_folder
            else:
                current_time = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
                cls.log_folder = os.path.join(log_dir, current_time)
                os.environ["CARD_ORDER_TIMESTAMP"] = current_time

            os.makedirs(cls.log_folder, exist_ok=True)

            cls.logger = logging.getLogger()
            cls.logger.setLevel(level)

            fmt = "%(asctime)s %(levelname)s [%(name)s] [%(filename)s (%(funcName)s:%(lineno)d)] - %(message)s"
            fm = logging.Formatter(fmt)

            th = TimedRotatingFileHandler(
                filename=os.path.join(cls.log_folder, "log.log"),
                when="midnight",
                interval=1,
                backupCount=3,
                encoding="utf-8",
            )
            th.setLevel(level)
            th.setFormatter(fm)
            cls.logger.addHandler(th)

            error_handler = FileHandler(filename=os.path.join(cls.log_folder, "error.log"), encoding="utf-8")
            error_handler.setLevel(WARNING)
            error_handler.setFormatter(fm)
            cls.logger.addHandler(error_handler)

            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)
            console_handler.setFormatter(fm)
            cls.logger.addHandler(console_handler)

        return cls.logger
