"""This file contains objects used in different tests"""
import logging
import os
import shutil

THIS_DIR = os.path.dirname(os.path.abspath(__file__))


def reset_logger():
    """This function reset the logger gammafn by closing
    and removing its handlers.
    """
    logger = logging.getLogger("gammafn")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.addHandler(logging.NullHandler())


def reset_results(folder):
    """Remove a results folder left over by a previous test run

    Arguments
    ---------
    folder: str
    Name of the folder under tests/results/
    """
    path = f"{THIS_DIR}/results/{folder}"
    if os.path.exists(path):
        shutil.rmtree(path)
