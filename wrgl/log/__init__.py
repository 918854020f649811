"""Utility functionality for logging.
"""
import os
import sys

import logbook

from wrgl import utils
from wrgl.pipeline import datadict as dd

LOG_NAME = "wrgl-pipeline"

def get_log_dir(config):
    return dd.get_log_dir(config)

logger = logbook.Logger(LOG_NAME)

class CloseableNestedSetup(logbook.NestedSetup):
    def close(self):
        for obj in self.objects:
            if hasattr(obj, "close"):
                obj.close()

def _create_log_handler(config):
    logbook.set_datetime_format("utc")
    handlers = [logbook.NullHandler()]
    format_str = "".join(["[{record.time:%Y-%m-%dT%H:%MZ}] " if config.get("include_time", True) else "",
                          "{record.level_name}: {record.message}"])

    log_dir = get_log_dir(config)
    if log_dir:
        utils.safe_makedir(log_dir)
        handlers.append(logbook.FileHandler(os.path.join(log_dir, "%s.log" % LOG_NAME),
                                            format_string=format_str, level="INFO"))
        handlers.append(logbook.FileHandler(os.path.join(log_dir, "%s-debug.log" % LOG_NAME),
                                            format_string=format_str, level="DEBUG", bubble=True))
    handlers.append(logbook.StreamHandler(sys.stderr, format_string=format_str, bubble=True,
                                          level=config.get("log_level", "INFO")))
    return CloseableNestedSetup(handlers)

def setup_local_logging(config=None):
    """Setup logging for a local run, directing messages to file and stderr handlers.

    Returns the pushed handler so callers can pop and close it when finished.
    """
    if config is None: config = {}
    handler = _create_log_handler(config)
    handler.push_application()
    return handler

def get_logger(log=None):
    """Return an injected logger, falling back to the pipeline logger.
    """
    return log if log is not None else logger
