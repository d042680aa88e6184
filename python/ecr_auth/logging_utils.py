"""Logging setup for the ECR auth command line and library users."""

import logging
from typing import Optional

# botocore logs full response bodies at DEBUG, and ECR responses carry the token
QUIET_LOGGERS = ("botocore", "boto3", "urllib3")


def setup_logging(level: int = logging.INFO, fmt: Optional[str] = None) -> None:
	"""Configure root logging once. Subsequent calls are no-ops.
	If fmt is not provided, a sensible default is used.
	AWS SDK loggers are capped at WARNING whatever the level.
	"""
	if logging.getLogger().handlers:
		# Already configured; do nothing
		return
	format_str = fmt or '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
	logging.basicConfig(level=level, format=format_str)
	for name in QUIET_LOGGERS:
		logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: Optional[str] = None) -> logging.Logger:
	"""Return a module/logger by name, after ensuring logging is configured."""
	setup_logging()
	return logging.getLogger(name) if name else logging.getLogger(__name__)


def parse_log_level(level: str) -> int:
	"""Map a level name like 'debug' or 'WARNING' to its logging constant.

	Raises:
		ValueError: If the name is not a standard logging level
	"""
	value = logging.getLevelName(str(level).upper())
	if not isinstance(value, int):
		raise ValueError(f"Unknown log level: {level}")
	return value
