"""This module define several functions and variables used throughout the
package"""
import logging
import os
import sys

import numpy as np
from scipy import special as scipy_special

from gammafn import special
from gammafn.errors import AccuracyError

module_logger = logging.getLogger(__name__)

# kernels exposed by gammafn.special and their scipy counterparts
ACCEPTED_FUNCTIONS = {
    "gamma": "gamma",
    "lgamma": "gammaln",
    "digamma": "psi",
}

ACCEPTED_SPACINGS = ["lin", "log"]


def kernel_function(function_name):
    """Return the gammafn kernel with the given name

    Arguments
    ---------
    function_name: str
    Name of the kernel. Must be a key of ACCEPTED_FUNCTIONS

    Return
    ------
    kernel: numba.core.registry.CPUDispatcher
    The compiled kernel

    Raise
    -----
    AccuracyError if the function is not known
    """
    if function_name not in ACCEPTED_FUNCTIONS:
        raise AccuracyError(
            f"Unknown function '{function_name}'. Accepted functions are "
            f"{sorted(ACCEPTED_FUNCTIONS)}")
    return getattr(special, function_name)


def reference_function(function_name):
    """Return the scipy.special function used as reference for the gammafn
    kernel with the given name

    Arguments
    ---------
    function_name: str
    Name of the kernel. Must be a key of ACCEPTED_FUNCTIONS

    Return
    ------
    reference: numpy.ufunc
    The scipy.special ufunc

    Raise
    -----
    AccuracyError if the function is not known
    """
    if function_name not in ACCEPTED_FUNCTIONS:
        raise AccuracyError(
            f"Unknown function '{function_name}'. Accepted functions are "
            f"{sorted(ACCEPTED_FUNCTIONS)}")
    return getattr(scipy_special, ACCEPTED_FUNCTIONS.get(function_name))


def build_grid(x_min, x_max, num_points, spacing):
    """Build the grid of arguments on which kernels are evaluated

    Arguments
    ---------
    x_min: float
    First point of the grid

    x_max: float
    Last point of the grid

    num_points: int
    Number of points in the grid

    spacing: "lin" or "log"
    Specifies whether the grid is evenly spaced on x (lin) or on the
    logarithm of x (log)

    Return
    ------
    grid: array of float
    The grid

    Raise
    -----
    AccuracyError if the spacing is not valid
    """
    if spacing == "lin":
        return np.linspace(x_min, x_max, num_points)
    if spacing == "log":
        if x_min <= 0.0:
            raise AccuracyError(
                "Logarithmic spacing requires a positive 'x min'. "
                f"Found: {x_min}")
        return np.logspace(np.log10(x_min), np.log10(x_max), num_points)
    raise AccuracyError(
        f"Unknown spacing '{spacing}'. Accepted spacings are "
        f"{ACCEPTED_SPACINGS}")


PROGRESS_LEVEL_NUM = 15
logging.addLevelName(PROGRESS_LEVEL_NUM, "PROGRESS")


def progress(self, message, *args, **kws):
    """Function to log with level PROGRESS"""
    if self.isEnabledFor(PROGRESS_LEVEL_NUM):  # pragma: no branch
        # pylint: disable-msg=protected-access
        # this method will be attached to logging.Logger
        self._log(PROGRESS_LEVEL_NUM, message, args, **kws)


logging.Logger.progress = progress

OK_WARNING_LEVEL_NUM = 31
logging.addLevelName(OK_WARNING_LEVEL_NUM, "WARNING OK")


def ok_warning(self, message, *args, **kws):
    """Function to log with level WARNING OK"""
    if self.isEnabledFor(OK_WARNING_LEVEL_NUM):  # pragma: no branch
        # pylint: disable-msg=protected-access
        # this method will be attached to logging.Logger
        self._log(OK_WARNING_LEVEL_NUM, message, args, **kws)


logging.Logger.ok_warning = ok_warning


def parse_logging_level(logging_level):
    """Convert a logging level name into its numeric value

    Arguments
    ---------
    logging_level: int or str
    If str, it should be a Level from the logging module (i.e. CRITICAL,
    ERROR, WARNING, INFO, DEBUG, NOTSET) or one of the user-defined levels
    PROGRESS and WARNING_OK.

    Return
    ------
    logging_level: int
    The numeric logging level
    """
    if isinstance(logging_level, str):
        if logging_level.upper() == "PROGRESS":
            logging_level = PROGRESS_LEVEL_NUM
        elif logging_level.upper() in ["WARNING_OK", "WARNING OK"]:
            logging_level = OK_WARNING_LEVEL_NUM
        else:
            logging_level = getattr(logging, logging_level.upper())
    return logging_level


def setup_logger(logging_level_console=logging.DEBUG,
                 log_file=None,
                 logging_level_file=logging.DEBUG):
    """This function set up the logger for the package gammafn

    Arguments
    ---------
    logging_level_console: int or str - Default: logging.DEBUG
    Logging level for the console handler. If str, it should be a Level from
    the logging module (i.e. CRITICAL, ERROR, WARNING, INFO, DEBUG, NOTSET).
    Additionally, the user-defined levels PROGRESS and WARNING_OK are allowed.

    log_file: str or None
    Log file for logging

    logging_level_file: int or str - Default: logging.DEBUG
    Logging level for the file handler. If str, it should be a Level from
    the logging module (i.e. CRITICAL, ERROR, WARNING, INFO, DEBUG, NOTSET).
    Additionally, the user-defined level PROGRESS and WARNING_OK are allowed.
    Ignored if log_file is None.
    """
    logging_level_console = parse_logging_level(logging_level_console)
    logging_level_file = parse_logging_level(logging_level_file)

    logger = logging.getLogger("gammafn")
    logger.setLevel(logging.DEBUG)

    # logging formatter
    formatter = logging.Formatter('[%(levelname)s]: %(message)s')

    # create console handler to logs messages
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging_level_console)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # create file handler which logs messages to file
    if log_file is not None:
        if os.path.exists(log_file):
            newfilename = f'{log_file}.{os.path.getmtime(log_file)}'
            os.rename(log_file, newfilename)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(logging_level_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # numba is very verbose at debug level
    logging.getLogger('numba').setLevel(logging.WARNING)
