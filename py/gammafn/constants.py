"""This module defines the constants used by the special function kernels.

It includes the rational approximation tables for the gamma function over
(1, 2) and the asymptotic series coefficients used for log-gamma and
digamma at large arguments.
"""
import numpy as np

# Euler-Mascheroni constant
EULER_GAMMA = 0.577215664901532860606512090

# 0.5 * log(2 * pi)
HALF_LOG_2PI = 0.91893853320467274178032973640562

# zeta(2) = pi**2 / 6
ZETA_2 = 1.6449340668482264365

# gamma(x) overflows a double above this value
GAMMA_OVERFLOW_THRESHOLD = 171.624

# gamma: upper limit of the 1/gamma(x) ~ x + gamma x**2 region
GAMMA_SMALL_X = 0.001
# gamma and lgamma: lower limit of the asymptotic (Stirling) region
ASYMPTOTIC_X = 12.0

# digamma: upper limit of the Laurent series region
DIGAMMA_SMALL_X = 1e-6
# digamma: arguments are shifted above this value before using the
# asymptotic expansion
DIGAMMA_ASYMPTOTIC_X = 8.5

# numerator coefficients for the approximation of gamma over the interval (1,2)
GAMMA_P = np.array([
    -1.71618513886549492533811E+0,
    2.47656508055759199108314E+1,
    -3.79804256470945635097577E+2,
    6.29331155312818442661052E+2,
    8.66966202790413211295064E+2,
    -3.14512729688483675254357E+4,
    -3.61444134186911729807069E+4,
    6.64561438202405440627855E+4,
])

# denominator coefficients for the approximation of gamma over the interval (1,2)
GAMMA_Q = np.array([
    -3.08402300119738975254353E+1,
    3.15350626979604161529144E+2,
    -1.01515636749021914166146E+3,
    -3.10777167157231109440444E+3,
    2.25381184209801510330112E+4,
    4.75584627752788110767815E+3,
    -1.34659959864969306392456E+5,
    -1.15132259675553483497211E+5,
])

# Abramowitz and Stegun 6.1.41
STIRLING_COEFFS = np.array([
    1.0 / 12.0,
    -1.0 / 360.0,
    1.0 / 1260.0,
    -1.0 / 1680.0,
    1.0 / 1188.0,
    -691.0 / 360360.0,
    1.0 / 156.0,
    -3617.0 / 122400.0,
])

# Algorithm AS 103 (Bernardo 1976), de Moivre expansion of digamma
DIGAMMA_COEFFS = np.array([
    1.0 / 12.0,
    1.0 / 120.0,
    1.0 / 252.0,
    1.0 / 240.0,
    1.0 / 132.0,
])
