"""
Custom logging configuration for the finlife engine.

Extends Python's standard logging with a custom DEEP_DEBUG level (5)
for very verbose debugging output. Provides the FinLogger class used by
every pipeline stage and system.

Log Levels
----------
- CRITICAL (50): Critical errors
- ERROR (40): Errors
- WARNING (30): Warnings (crisis transitions, repossessions)
- INFO (20): Informational messages (default)
- DEBUG (10): Debug messages
- DEEP_DEBUG (5): Very verbose debug messages

Examples
--------
Use logger in a pipeline stage:

>>> from finlife import logging
>>> logger = logging.getLogger("finlife.events.accrue_weekly_interest")
>>> logger.info("Stage executing")
>>> logger.deep("Very verbose output")

Configure per-stage log levels:

>>> import finlife as fl
>>> log_config = {
...     "default_level": "INFO",
...     "events": {"evaluate_crisis": "DEBUG"},
... }
>>> sim = fl.Simulation.init(logging=log_config)

See Also
--------
Event.get_logger : Get logger for a specific stage
"""

import logging
from typing import Any

(CRITICAL, ERROR, WARNING, INFO, DEBUG) = (
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
)
DEEP_DEBUG = 5
logging.addLevelName(DEEP_DEBUG, "DEEP")


class FinLogger(logging.Logger):
    """
    Custom logger with DEEP_DEBUG level support.

    Examples
    --------
    >>> logger = FinLogger("test")
    >>> logger.setLevel(5)  # DEEP_DEBUG
    >>> logger.deep("Very verbose message")
    """

    def deep(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log message at DEEP_DEBUG level (5).

        Parameters
        ----------
        msg : str
            Message format string.
        *args : Any
            Arguments for message formatting.
        **kwargs : Any
            Additional logging kwargs.
        """
        if self.isEnabledFor(DEEP_DEBUG):
            self._log(DEEP_DEBUG, msg, args, **kwargs)


logging.setLoggerClass(FinLogger)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)


def getLogger(name: str | None = None) -> FinLogger:
    """
    Get a FinLogger instance.

    Parameters
    ----------
    name : str, optional
        Logger name. If None, returns root logger.

    Returns
    -------
    FinLogger
        Logger instance with deep() method.
    """
    return logging.getLogger(name)  # type: ignore[return-value]
