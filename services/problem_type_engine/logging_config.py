import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from .config import settings

SERVICE_NAME = "problem_type_engine"


class ProblemTypeJsonFormatter(jsonlogger.JsonFormatter):
    """JSON records tagged with the service name and an upper-cased level."""
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = record.created
        log_record['level'] = (log_record.get('level') or record.levelname).upper()
        log_record['service'] = SERVICE_NAME
        log_record['lineno'] = record.lineno


def _has_json_handler(logger: logging.Logger) -> bool:
    return any(isinstance(h.formatter, ProblemTypeJsonFormatter) for h in logger.handlers)


def setup_logging(log_level_str: Optional[str] = None) -> None:
    """
    Configures JSON logging on the root logger, at settings.log_level unless
    a level is given.

    Safe to call more than once: the JSON handler is only added the first time,
    later calls just adjust the level.
    """
    level_name = (log_level_str or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not _has_json_handler(root_logger):
        log_handler = logging.StreamHandler(sys.stdout)
        log_handler.setFormatter(ProblemTypeJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s'))
        root_logger.addHandler(log_handler)
        root_logger.info(f"JSON logging configured for {SERVICE_NAME} at {logging.getLevelName(log_level)}")
