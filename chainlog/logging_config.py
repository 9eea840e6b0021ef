"""
Logging Configuration for ChainLog

Console and rotating-file logging setup, an optional structured JSON
formatter, and a small event logger for inference runs.
"""

import logging
import logging.handlers
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class StructuredFormatter(logging.Formatter):
    """Structured JSON formatter for logs"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        return json.dumps(log_entry, default=str)


class InferenceLogger:
    """Event logger for engine runs, attaching structured fields to each record"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log_inference_run(self,
                          status: str,
                          iterations: int,
                          fact_count: int,
                          derived_count: int,
                          execution_time: float) -> None:
        """Log the outcome of an inference run"""
        self.logger.info(
            f"Inference finished ({status}) after {iterations} iteration(s): "
            f"{derived_count} derived, {fact_count} total",
            extra={
                'extra_fields': {
                    'event_type': 'inference_run',
                    'status': status,
                    'iterations': iterations,
                    'fact_count': fact_count,
                    'derived_count': derived_count,
                    'execution_time_ms': execution_time
                }
            }
        )

    def log_iteration_cap(self, max_iterations: int, fact_count: int) -> None:
        """Log a run cut off by the iteration cap"""
        self.logger.warning(
            f"Inference stopped after {max_iterations} iterations (potential loop or unbounded derivation)",
            extra={
                'extra_fields': {
                    'event_type': 'iteration_cap_exceeded',
                    'max_iterations': max_iterations,
                    'fact_count': fact_count
                }
            }
        )

    def log_rejected_fact(self, term: Any) -> None:
        """Log a fact rejected because it is not ground"""
        self.logger.warning(
            f"Cannot add non-ground fact: {term}",
            extra={
                'extra_fields': {
                    'event_type': 'non_ground_fact_rejected',
                    'term': str(term)
                }
            }
        )


def setup_logging(log_level: str = "INFO",
                  log_file: Optional[Union[str, Path]] = None,
                  enable_structured_logging: bool = False) -> None:
    """
    Setup logging for ChainLog

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a rotating log file
        enable_structured_logging: Whether to use structured JSON logging
    """
    level = logging.getLevelName(log_level.upper()) if isinstance(log_level, str) else None
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if enable_structured_logging:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(DEFAULT_FORMAT)

    # Console output goes to stderr so results on stdout stay clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    setup_component_loggers()


def setup_component_loggers() -> None:
    """Setup levels for the individual ChainLog loggers"""
    # Unification and matching only emit DEBUG records
    level = logging.WARNING if logging.getLogger().level > logging.DEBUG else logging.NOTSET
    logging.getLogger('chainlog.unification').setLevel(level)
    logging.getLogger('chainlog.matching').setLevel(level)


def get_logger(name: str) -> InferenceLogger:
    """Get an inference event logger"""
    return InferenceLogger(name)
