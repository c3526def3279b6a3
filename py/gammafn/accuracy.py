"""This module defines the Accuracy class.
This class is responsible for evaluating the special function kernels on a
grid of arguments and comparing them against the scipy.special references.
"""
import logging
import time

import fitsio
from numba import njit
import numpy as np

from gammafn.errors import AccuracyError
from gammafn.utils import build_grid, kernel_function, reference_function


@njit()
def evaluate_kernel(kernel, grid):
    """Evaluate a scalar kernel on every point of a grid

    Arguments
    ---------
    kernel: numba.core.registry.CPUDispatcher
    One of the kernels defined in gammafn.special

    grid: array of float
    The arguments

    Return
    ------
    values: array of float
    The kernel evaluated at each point of the grid
    """
    values = np.zeros(grid.size)
    for index in range(grid.size):
        values[index] = kernel(grid[index])
    return values


def compare_to_reference(values, reference, relative_tolerance,
                         absolute_tolerance):
    """Compare kernel values against reference values

    A point passes if |value - reference| <= atol + rtol * |reference|.
    Points where the reference is not finite pass only if the value is
    identical (e.g. the same infinity).

    Arguments
    ---------
    values: array of float
    Kernel values

    reference: array of float
    Reference values

    relative_tolerance: float
    Relative tolerance

    absolute_tolerance: float
    Absolute tolerance

    Return
    ------
    abs_err: array of float
    Absolute errors. Zero where the reference is not finite and the values
    agree, infinite where they do not.

    rel_err: array of float
    Relative errors. Zero where the reference is zero or not finite.

    failed: array of bool
    True for the points outside the tolerance
    """
    finite = np.isfinite(reference)

    abs_err = np.zeros(values.size)
    abs_err[finite] = np.fabs(values[finite] - reference[finite])
    abs_err[~finite & (values != reference)] = np.inf

    rel_err = np.zeros(values.size)
    w = finite & (reference != 0.0)
    rel_err[w] = abs_err[w] / np.fabs(reference[w])

    failed = np.zeros(values.size, dtype=bool)
    failed[finite] = ~(abs_err[finite] <= absolute_tolerance +
                       relative_tolerance * np.fabs(reference[finite]))
    failed[~finite] = values[~finite] != reference[~finite]

    return abs_err, rel_err, failed


class Accuracy:
    """Class to check the kernels against their scipy references

    Methods
    -------
    __init__
    compute
    save_results

    Attributes
    ----------
    absolute_tolerance: float
    Absolute tolerance of the comparison

    functions: list of str
    Names of the kernels to check

    grid: array of float
    Arguments on which the kernels are evaluated

    logger: logging.Logger
    Logger object

    num_points: int
    Number of points in the grid

    out_dir: str
    Directory where the results are saved

    relative_tolerance: float
    Relative tolerance of the comparison

    results: dict
    For each function, a dictionary with the arrays "values", "reference",
    "abs_err", "rel_err" and "failed"

    spacing: str
    "lin" or "log", spacing of the grid

    summary: dict
    For each function, a dictionary with keys "max_abs_err", "max_rel_err"
    and "num_failed"

    x_max: float
    Last point of the grid

    x_min: float
    First point of the grid
    """
    def __init__(self, config):
        """Initialize class instance

        Arguments
        ---------
        config: Config
        A Config instance with the accuracy options
        """
        self.logger = logging.getLogger(__name__)

        self.functions = config.functions
        self.x_min = config.x_min
        self.x_max = config.x_max
        self.num_points = config.num_points
        self.spacing = config.spacing
        self.relative_tolerance = config.relative_tolerance
        self.absolute_tolerance = config.absolute_tolerance
        self.out_dir = config.out_dir

        self.grid = build_grid(self.x_min, self.x_max, self.num_points,
                               self.spacing)
        self.results = {}
        self.summary = {}

    def compute(self):
        """Evaluate the kernels and their references on the grid"""
        for function_name in self.functions:
            t0 = time.time()
            kernel = kernel_function(function_name)
            reference = reference_function(function_name)

            values = evaluate_kernel(kernel, self.grid)
            reference_values = reference(self.grid)
            abs_err, rel_err, failed = compare_to_reference(
                values, reference_values, self.relative_tolerance,
                self.absolute_tolerance)

            self.results[function_name] = {
                "values": values,
                "reference": reference_values,
                "abs_err": abs_err,
                "rel_err": rel_err,
                "failed": failed,
            }
            self.summary[function_name] = {
                "max_abs_err": float(np.max(abs_err)),
                "max_rel_err": float(np.max(rel_err)),
                "num_failed": int(np.sum(failed)),
            }

            t1 = time.time()
            self.logger.progress(
                f"{function_name}: max abs error "
                f"{self.summary[function_name]['max_abs_err']:.3e}, "
                f"max rel error {self.summary[function_name]['max_rel_err']:.3e} "
                f"({t1-t0:.2f} s)")
            if self.summary[function_name]["num_failed"] > 0:
                worst = np.argmax(rel_err)
                self.logger.warning(
                    f"{function_name}: {self.summary[function_name]['num_failed']} "
                    f"of {self.num_points} points outside tolerance. Worst "
                    f"relative error at x = {self.grid[worst]}")

    def save_results(self):
        """Save the comparison tables, one file per function

        Raise
        -----
        AccuracyError if compute was not run before
        """
        if len(self.results) == 0:
            raise AccuracyError(
                "No results to save. Run Accuracy.compute() first")

        for function_name, result in self.results.items():
            header = [
                {"name": "FUNCTION", "value": function_name,
                 "comment": "gammafn kernel"},
                {"name": "XMIN", "value": self.x_min,
                 "comment": "first point of the grid"},
                {"name": "XMAX", "value": self.x_max,
                 "comment": "last point of the grid"},
                {"name": "NPOINTS", "value": self.num_points,
                 "comment": "number of points"},
                {"name": "SPACING", "value": self.spacing,
                 "comment": "grid spacing"},
                {"name": "RTOL", "value": self.relative_tolerance,
                 "comment": "relative tolerance"},
                {"name": "ATOL", "value": self.absolute_tolerance,
                 "comment": "absolute tolerance"},
                {"name": "MAXABS",
                 "value": self.summary[function_name]["max_abs_err"],
                 "comment": "maximum absolute error"},
                {"name": "MAXREL",
                 "value": self.summary[function_name]["max_rel_err"],
                 "comment": "maximum relative error"},
                {"name": "NFAIL",
                 "value": self.summary[function_name]["num_failed"],
                 "comment": "number of points outside tolerance"},
            ]
            with fitsio.FITS(f"{self.out_dir}accuracy-{function_name}.fits.gz",
                             'rw',
                             clobber=True) as results:
                results.write([
                    self.grid, result["values"], result["reference"],
                    result["abs_err"], result["rel_err"]
                ],
                              names=[
                                  "X", "VALUE", "REFERENCE", "ABS_ERR",
                                  "REL_ERR"
                              ],
                              header=header,
                              extname="ACCURACY")

            self.logger.info(
                f"Saved {self.out_dir}accuracy-{function_name}.fits.gz")
