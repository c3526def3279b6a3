"""This file contains an abstract class to define functions common to all tests"""
import os
import re
import unittest

import fitsio
import numpy as np

THIS_DIR = os.path.dirname(os.path.abspath(__file__))


class AbstractTest(unittest.TestCase):
    """Abstract test class to define functions used in all tests

    Methods
    -------
    assert_close
    compare_error_message
    read_accuracy_table
    setUp
    """
    def setUp(self):
        """ Check that the results folder exists and create it
            if it does not."""
        if not os.path.exists(f"{THIS_DIR}/results/"):
            os.makedirs(f"{THIS_DIR}/results/")

    def assert_close(self, value, expected, rtol=1e-12, atol=0.0):
        """Check that a value is close to the expected one, printing both
        if they are not

        Arguments
        ---------
        value: float
        Computed value

        expected: float
        Expected value

        rtol: float - Default: 1e-12
        Relative tolerance

        atol: float - Default: 0.0
        Absolute tolerance
        """
        if not np.isclose(value, expected, rtol=rtol, atol=atol):
            print(f"\nExpected: {expected}")
            print(f"Received: {value}")
            print(f"Difference: {value - expected}")
        self.assertTrue(np.isclose(value, expected, rtol=rtol, atol=atol))

    def compare_error_message(self,
                              context_manager,
                              expected_message,
                              startswith=False):
        """Check the received error message is the same as the expected

        Arguments
        ---------
        context_manager: unittest.case._AssertRaisesContext
        Context manager when errors are expected to be raised.

        expected_message: str
        Expected error message

        startswith: bool - Default: False
        If True, check that expected_message is the beginning of the actual error
        message. Otherwise check that expected_message is the entire message
        """
        if "py/gammafn/tests" in expected_message:
            expected_message = re.sub(r"\/[^ ]*\/py\/gammafn\/tests\/", "",
                                      expected_message)
        received_message = str(context_manager.exception)
        if "py/gammafn/tests" in received_message:
            received_message = re.sub(r"\/[^ ]*\/py\/gammafn\/tests\/", "",
                                      received_message)

        if startswith:
            if not received_message.startswith(expected_message):
                print("\nReceived incorrect error message")
                print("Expected message to start with:")
                print(expected_message)
                print("Received:")
                print(received_message)
            self.assertTrue(received_message.startswith(expected_message))
        else:
            if not received_message == expected_message:
                print("\nReceived incorrect error message")
                print("Expected:")
                print(expected_message)
                print("Received:")
                print(received_message)
            self.assertTrue(received_message == expected_message)

    def read_accuracy_table(self, filename):
        """Read a table saved by Accuracy.save_results

        Arguments
        ---------
        filename: str
        Name of the file

        Return
        ------
        data: numpy structured array
        The table

        header: fitsio.FITSHDR
        The table header
        """
        with fitsio.FITS(filename) as hdul:
            data = hdul["ACCURACY"].read()
            header = hdul["ACCURACY"].read_header()
        return data, header
