"""
Grid integration (:mod:`~gridsampler.algorithms.integration`)
===========================================================================

Integrate the interpolated density of a weight grid and compare samples
with its marginal distributions.

.. note::

    The trapezoid rule along each axis integrates a multilinear surface
    exactly, so masses and marginals here carry no quadrature error.


**Integrals**

.. autosummary::

    total_mass
    marginal_weights
    marginal_cdf

**Diagnostics**

.. autosummary::

    goodness_of_fit

|

"""
import numpy as np
from scipy.integrate import trapezoid
from scipy.stats import kstest


# Integrals
# -----------------------------------------------------------------------------

def total_mass(grid):
    """Compute the total probability mass of the interpolated density.

    Parameters
    ----------
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid.

    Returns
    -------
    float
        Integral of the interpolated density over the grid domain.

    """
    mass = grid.weights
    for axis in reversed(range(grid.ndim)):
        mass = trapezoid(mass, x=grid.knots[axis], axis=axis)

    return float(mass)


def marginal_weights(grid, axis):
    """Compute the marginal density at the knots of one axis.

    The marginal of a multilinear density is piecewise linear between
    the knots of the retained axis.

    Parameters
    ----------
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid.
    axis : int
        Retained axis.

    Returns
    -------
    float :class:`numpy.ndarray`
        Unnormalised marginal density at the knots of `axis`.

    """
    axis = range(grid.ndim)[axis]

    marginal = grid.weights
    for other_axis in reversed(range(grid.ndim)):
        if other_axis != axis:
            marginal = trapezoid(
                marginal, x=grid.knots[other_axis], axis=other_axis
            )

    return np.asarray(marginal, dtype=float)


def marginal_cdf(grid, axis):
    """Return the normalised marginal cumulative distribution function
    along one axis.

    Parameters
    ----------
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid.
    axis : int
        Retained axis.

    Returns
    -------
    callable
        Marginal distribution function, piecewise quadratic between
        knots, equal to 0 below and 1 above the axis range.

    """
    knots = grid.knots[axis]
    values = marginal_weights(grid, axis)

    widths = np.diff(knots)
    cumulative_mass = np.insert(
        np.cumsum(widths * (values[:-1] + values[1:]) / 2), 0, 0.
    )
    mass = cumulative_mass[-1]

    def cdf(x):

        x = np.clip(np.asarray(x, dtype=float), knots[0], knots[-1])

        idx = np.clip(
            np.searchsorted(knots, x, side='right') - 1, 0, knots.size - 2
        )
        t = (x - knots[idx]) / widths[idx]

        partial_mass = widths[idx] * (
            values[idx] * t + (values[idx + 1] - values[idx]) * t**2 / 2
        )

        return (cumulative_mass[idx] + partial_mass) / mass

    return cdf


# Diagnostics
# -----------------------------------------------------------------------------

def goodness_of_fit(samples, grid, axis=0):
    """Test samples against the marginal distribution of the
    interpolated density along one axis.

    Parameters
    ----------
    samples : float, array_like
        Samples of shape ``(M, grid.ndim)``.  A flat array is accepted
        for a 1-d grid.
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid.
    axis : int, optional
        Tested axis (default is 0).

    Returns
    -------
    :class:`scipy.stats._stats_py.KstestResult`
        One-sample Kolmogorov--Smirnov test result.

    """
    samples = np.asarray(samples, dtype=float).reshape(-1, grid.ndim)

    return kstest(samples[:, axis], marginal_cdf(grid, axis))
