"""This module defines the special function kernels.

This module provides three functions:
    - gamma
    - lgamma
    - digamma
See the respective documentation for details

All of them are numba-compiled scalar functions taking a float and returning
a float. They do not validate their argument: out of domain inputs (e.g.
non-positive integers) produce whatever infinity or NaN falls out of the
formulas. Division by zero follows the numpy error model, i.e. it returns
an infinity instead of raising ZeroDivisionError.
"""
import math

from numba import njit
import numpy as np

from gammafn.constants import (
    ASYMPTOTIC_X,
    DIGAMMA_ASYMPTOTIC_X,
    DIGAMMA_COEFFS,
    DIGAMMA_SMALL_X,
    EULER_GAMMA,
    GAMMA_OVERFLOW_THRESHOLD,
    GAMMA_P,
    GAMMA_Q,
    GAMMA_SMALL_X,
    HALF_LOG_2PI,
    STIRLING_COEFFS,
    ZETA_2,
)


@njit(error_model="numpy")
def _gamma_rational(x):
    """Compute the gamma function for x < 12.

    For x < 0.001, 1/gamma(x) has power series x + gamma x^2 - ...
    The relative error of the two-term truncation over this interval is
    less than 6e-7.

    Over [0.001, 12) the gamma function is directly approximated over (1,2)
    by a rational function (Cody's minimax coefficients) and other arguments
    are reduced to this interval using the recurrence identity.

    Arguments
    ---------
    x: float
    The argument. Expected to be positive.

    Return
    ------
    value: float
    The gamma function evaluated at x
    """
    if x < GAMMA_SMALL_X:
        return 1.0 / (x * (1.0 + EULER_GAMMA * x))

    # bring y into (1,2), will correct for this below
    y = x
    num_shifts = 0
    arg_was_less_than_one = y < 1.0
    if arg_was_less_than_one:
        y += 1.0
    else:
        num_shifts = int(math.floor(y)) - 1
        y -= num_shifts

    num = 0.0
    den = 1.0
    z = y - 1.0
    for index in range(GAMMA_P.size):
        num = (num + GAMMA_P[index]) * z
        den = den * z + GAMMA_Q[index]
    result = num / den + 1.0

    if arg_was_less_than_one:
        # gamma(z) = gamma(z+1)/z, and y - 1 is the original argument
        result /= y - 1.0
    else:
        # gamma(z+n) = z*(z+1)* ... *(z+n-1)*gamma(z)
        for _ in range(num_shifts):
            result *= y
            y += 1.0

    return result


@njit(error_model="numpy")
def _lgamma_asymptotic(x):
    """Compute the log of the gamma function using the asymptotic series
    (Abramowitz and Stegun 6.1.41). The series is good to at least 11 or 12
    figures for x >= 12 (see Whittaker and Watson, A Course in Modern
    Analysis (1927), page 252).

    Arguments
    ---------
    x: float
    The argument. Expected to be larger than or equal to 12.

    Return
    ------
    value: float
    The log of the gamma function evaluated at x
    """
    z = 1.0 / (x * x)
    total = STIRLING_COEFFS[STIRLING_COEFFS.size - 1]
    for index in range(STIRLING_COEFFS.size - 2, -1, -1):
        total *= z
        total += STIRLING_COEFFS[index]

    return (x - 0.5) * math.log(x) - x + HALF_LOG_2PI + total / x


@njit(error_model="numpy")
def gamma(x):
    """Compute the gamma function.

    The function domain is split into three intervals:
    (0, 0.001), [0.001, 12), and [12, infinity). Above 171.624 the result
    does not fit in a double and positive infinity is returned.

    Arguments
    ---------
    x: float
    The argument. Expected to be positive.

    Return
    ------
    value: float
    The gamma function evaluated at x
    """
    if x < ASYMPTOTIC_X:
        return _gamma_rational(x)

    if x > GAMMA_OVERFLOW_THRESHOLD:
        return np.inf
    return math.exp(_lgamma_asymptotic(x))


@njit(error_model="numpy")
def lgamma(x):
    """Compute the log of the gamma function.

    For x < 12 this is log(|gamma(x)|). Non-positive arguments are not
    rejected: they follow the same path, which loses the sign of gamma.

    Arguments
    ---------
    x: float
    The argument. Expected to be positive.

    Return
    ------
    value: float
    The log of the gamma function evaluated at x
    """
    if x < ASYMPTOTIC_X:
        return math.log(math.fabs(_gamma_rational(x)))

    return _lgamma_asymptotic(x)


@njit(error_model="numpy")
def digamma(x):
    """Compute the digamma function, the logarithmic derivative of the gamma
    function.

    Follows Algorithm AS 103 (Bernardo 1976): small positive arguments use
    the Laurent series around the pole at 0, negative arguments are reflected
    using psi(1-x) - psi(x) = pi cot(pi x), and the rest are shifted up with
    psi(x+1) = psi(x) + 1/x until the asymptotic expansion is accurate.

    Arguments
    ---------
    x: float
    The argument. Any real number except the non-positive integers.

    Return
    ------
    value: float
    The digamma function evaluated at x
    """
    if x > 0.0 and x <= DIGAMMA_SMALL_X:
        return -EULER_GAMMA - 1.0 / x + ZETA_2 * x

    value = 0.0
    shifted_x = x
    if x < 0.0:
        value = -math.pi / math.tan(math.pi * x)
        shifted_x = 1.0 - x

    while shifted_x < DIGAMMA_ASYMPTOTIC_X:
        value -= 1.0 / shifted_x
        shifted_x += 1.0

    r = 1.0 / shifted_x
    value += math.log(shifted_x) - 0.5 * r

    r = r * r
    tail = DIGAMMA_COEFFS[DIGAMMA_COEFFS.size - 1]
    for index in range(DIGAMMA_COEFFS.size - 2, -1, -1):
        tail = DIGAMMA_COEFFS[index] - r * tail
    value -= r * tail

    return value
