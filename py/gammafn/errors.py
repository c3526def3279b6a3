"""This module define the different Error types related to the
package gammafn

The special function kernels never raise. These errors are used by the
layers around them.
"""


class AccuracyError(Exception):
    """
        Exceptions occurred in class Accuracy
    """


class ConfigError(Exception):
    """
        Exceptions occurred in class Config
    """


if __name__ == '__main__':
    raise Exception()
