#!/usr/bin/env python3
"""Check the accuracy of the gammafn special function kernels.

Evaluate gamma, lgamma and digamma on a grid of arguments and compare them
against the scipy.special implementations. Results are saved as one table
per function in the output directory specified in the configuration file.
"""
import logging
import time
import argparse
import sys

from gammafn.accuracy import Accuracy
from gammafn.config import Config

module_logger = logging.getLogger("gammafn")


def main(args):
    """Check kernel accuracy"""
    t0 = time.time()

    # load configuration
    config = Config(args.config_file)

    # compare the kernels against the references
    accuracy = Accuracy(config)
    accuracy.compute()

    # save results
    accuracy.save_results()

    t1 = time.time()
    module_logger.info(f"Total time ellapsed: {t1-t0}")

    num_failed = sum(item.get("num_failed")
                     for item in accuracy.summary.values())
    if num_failed > 0:
        module_logger.error(f"{num_failed} points outside tolerance")
        return 1

    module_logger.info("Done")
    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        description=('Check the accuracy of the gammafn kernels against '
                     'scipy.special'))

    parser.add_argument(
        'config_file',
        type=str,
        default=None,
        help=('Configuration file. Sections [general] and [accuracy] are '
              'accepted, see the README for the available options'))

    args = parser.parse_args()
    sys.exit(main(args))
