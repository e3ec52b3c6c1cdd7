"""Contains the logger of dualad modules.

``dualad`` logs through the `Logging <https://docs.python.org/3/library/logging.html>`__
standard library. The arithmetic of dual numbers and the elementary functions never
log; the differential operators in :mod:`dualad.autodiff` emit ``DEBUG`` messages
describing the seeding passes they perform.

Nothing is displayed unless the calling application configures logging for
``dualad.logger.dualad_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "dualad"
dualad_logger = logging.getLogger(logger_name)
