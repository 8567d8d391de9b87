"""
Utilities (:mod:`~gridsampler.utils`)
===========================================================================

Provide utilities for logging and warning formatting as well as random
number generation shared by the samplers.


**Processing and monitoring**

.. autosummary::

    setup_logger
    clean_warning_format


**Random numbers**

.. autosummary::

    random_generator

|

"""
import logging
import sys
import time

import numpy as np

__all__ = [
    'setup_logger',
    'clean_warning_format',
    'random_generator',
]


# Processing and monitoring utilities
# -----------------------------------------------------------------------------

class _LoggerFormatter(logging.Formatter):
    """Customised logging formatter.

    """

    _start_time = time.time()

    def format(self, record):
        """Modify the default logging record by adding elapsed time in
        hours, minutes and seconds.

        Parameters
        ----------
        record : :class:`Logging.LogRecord`
            Default logging record object.

        Returns
        -------
        str
            Modified record message with elapsed time.

        """
        elapsed_time = record.created - self._start_time
        h, remainder_time = divmod(elapsed_time, 3600)
        m, s = divmod(remainder_time, 60)

        record.elapsed = "(+{}:{:02d}:{:02d})".format(int(h), int(m), int(s))

        return logging.Formatter.format(self, record)


def setup_logger(level=logging.INFO):
    """Return the root logger formatted with elapsed time and piped
    to ``stdout``.

    Parameters
    ----------
    level : int, optional
        Logging level of the root logger (default is
        :data:`logging.INFO`).

    Returns
    -------
    logger : :class:`logging.Logger`
        Formatted root logger.

    """
    logger = logging.getLogger()
    logger.setLevel(level)

    logging_handler = logging.StreamHandler(sys.stdout)
    logging_handler.setFormatter(
        _LoggerFormatter(
            fmt=(
                '[%(asctime)s %(elapsed)s %(name)s %(levelname)s] '
                '%(message)s'
            ),
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    )
    logger.addHandler(logging_handler)

    return logger


# pylint: disable=unused-argument
def clean_warning_format(message, category, filename, lineno, line=None):
    """Clean warning message format.

    Parameters
    ----------
    message, category, filename, lineno : str
        Warning message, warning catagory, origin file name, line number.
    line : str or None, optional
        Source code line to be included in the warning message (default is
        `None`).

    Returns
    -------
    str
        Warning message format.

    Examples
    --------
    >>> import warnings
    >>> warnings.formatwarning = clean_warning_format

    """
    filename = filename if "gridsampler" not in filename \
        else "".join(filename.partition("gridsampler")[1:])

    return '%s:%s: %s: %s\n' % (filename, lineno, category.__name__, message)


# Random numbers
# -----------------------------------------------------------------------------

def random_generator(seed=None):
    """Return a random number generator from a seed.

    Parameters
    ----------
    seed : int, :class:`numpy.random.Generator` or None, optional
        Random seed (default is `None`).  An existing generator is passed
        through unchanged so that callers can share one random stream.

    Returns
    -------
    :class:`numpy.random.Generator`
        Random number generator.

    """
    if isinstance(seed, np.random.Generator):
        return seed

    return np.random.default_rng(seed)
