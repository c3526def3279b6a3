"""This file contains tests related to the functions in gammafn.utils"""
import logging
import os
import unittest

import numpy as np
from scipy import special as scipy_special

from gammafn import special
from gammafn.errors import AccuracyError
from gammafn.utils import (PROGRESS_LEVEL_NUM, OK_WARNING_LEVEL_NUM,
                           build_grid, kernel_function, parse_logging_level,
                           reference_function, setup_logger)
from gammafn.tests.abstract_test import AbstractTest
from gammafn.tests.test_utils import reset_logger

THIS_DIR = os.path.dirname(os.path.abspath(__file__))


class UtilsTest(AbstractTest):
    """Test the utility functions

    Methods
    -------
    assert_close (from AbstractTest)
    compare_error_message (from AbstractTest)
    setUp (from AbstractTest)
    tearDown
    test_build_grid
    test_function_lookup
    test_parse_logging_level
    test_setup_logger
    """
    def tearDown(self):
        """Actions done at test end
        Close the log files opened by setup_logger
        """
        reset_logger()

    def test_build_grid(self):
        """Test the grids of arguments"""
        grid = build_grid(-2.0, 2.0, 5, "lin")
        self.assertTrue(np.allclose(grid, [-2.0, -1.0, 0.0, 1.0, 2.0]))

        grid = build_grid(0.01, 100.0, 5, "log")
        self.assertTrue(np.allclose(grid, [0.01, 0.1, 1.0, 10.0, 100.0]))

        with self.assertRaises(AccuracyError) as context_manager:
            build_grid(0.0, 100.0, 5, "log")
        self.compare_error_message(
            context_manager,
            "Logarithmic spacing requires a positive 'x min'. Found: 0.0")

        with self.assertRaises(AccuracyError) as context_manager:
            build_grid(0.0, 100.0, 5, "sqrt")
        self.compare_error_message(
            context_manager,
            "Unknown spacing 'sqrt'. Accepted spacings are ['lin', 'log']")

    def test_function_lookup(self):
        """Test the lookup of kernels and scipy references"""
        self.assertTrue(kernel_function("gamma") is special.gamma)
        self.assertTrue(kernel_function("lgamma") is special.lgamma)
        self.assertTrue(kernel_function("digamma") is special.digamma)
        self.assertTrue(reference_function("gamma") is scipy_special.gamma)
        self.assertTrue(reference_function("lgamma") is scipy_special.gammaln)
        self.assertTrue(reference_function("digamma") is scipy_special.psi)

        expected_message = ("Unknown function 'beta'. Accepted functions are "
                            "['digamma', 'gamma', 'lgamma']")
        with self.assertRaises(AccuracyError) as context_manager:
            kernel_function("beta")
        self.compare_error_message(context_manager, expected_message)
        with self.assertRaises(AccuracyError) as context_manager:
            reference_function("beta")
        self.compare_error_message(context_manager, expected_message)

    def test_parse_logging_level(self):
        """Test the conversion of logging levels"""
        self.assertTrue(parse_logging_level("PROGRESS") == PROGRESS_LEVEL_NUM)
        self.assertTrue(parse_logging_level("progress") == PROGRESS_LEVEL_NUM)
        self.assertTrue(
            parse_logging_level("WARNING_OK") == OK_WARNING_LEVEL_NUM)
        self.assertTrue(parse_logging_level("info") == logging.INFO)
        self.assertTrue(parse_logging_level(logging.ERROR) == logging.ERROR)
        with self.assertRaises(AttributeError):
            parse_logging_level("LOUD")

    def test_setup_logger(self):
        """Test that messages reach the log file with the right levels"""
        log_file = f"{THIS_DIR}/results/setup_logger.log"
        setup_logger(logging_level_console="CRITICAL",
                     log_file=log_file,
                     logging_level_file="PROGRESS")

        logger = logging.getLogger("gammafn.tests")
        logger.debug("not logged")
        logger.progress("progress message")
        logger.ok_warning("warning ok message")
        reset_logger()

        with open(log_file, encoding="utf-8") as file:
            lines = [line.strip() for line in file.readlines()]
        self.assertTrue(lines == [
            "[PROGRESS]: progress message",
            "[WARNING OK]: warning ok message",
        ])


if __name__ == '__main__':
    unittest.main()
