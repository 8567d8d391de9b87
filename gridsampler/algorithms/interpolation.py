"""
Multilinear interpolation (:mod:`~gridsampler.algorithms.interpolation`)
===========================================================================

Evaluate the unnormalised probability density of a weight grid by
multilinear interpolation of its weights.

.. autosummary::

    MultilinearDensity

|

"""
import logging
from itertools import product

import numpy as np


class MultilinearDensity:
    r"""Multilinearly interpolated density of a weight grid.

    For a point in the cell with lower corner indices
    :math:`(i_1, \dots, i_N)` at fractional offsets
    :math:`(t_1, \dots, t_N)`, the density is

    .. math::

        f(x) = \sum_{c \in \{0, 1\}^N} w_{i_1 + c_1, \dots, i_N + c_N}
            \prod_{a=1}^N t_a^{c_a} (1 - t_a)^{1 - c_a} \,,

    a convex combination of the :math:`2^N` corner weights.  It is
    continuous across cells, reproduces the weights exactly at the knots
    and is bounded within each cell by the largest corner weight.

    Parameters
    ----------
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid.

    Attributes
    ----------
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid.

    Examples
    --------
    >>> from gridsampler.algorithms.grid import WeightGrid
    >>> density = MultilinearDensity(WeightGrid(([0, 1, 2],), [0, 1, 0]))
    >>> density(0.5), density(1.), density(1.5)
    (0.5, 1.0, 0.5)

    """

    def __init__(self, grid):

        self.logger = logging.getLogger(self.__class__.__name__)

        self.grid = grid

        # Corner selectors, ordered as in ``WeightGrid.corner_weights``.
        self._corner_bits = np.array(
            list(product((0, 1), repeat=grid.ndim)), dtype=bool
        )

    def __str__(self):

        return f"{self.__class__.__name__}({str(self.grid)})"

    def __call__(self, point):

        return self.density(point)

    def density(self, point):
        """Evaluate the interpolated density.

        Parameters
        ----------
        point : float, array_like
            A point of length ``grid.ndim`` or an array of points of shape
            ``(M, grid.ndim)``.  A scalar is accepted for a 1-d grid.

        Returns
        -------
        float or float :class:`numpy.ndarray`
            Density value(s).

        Raises
        ------
        :class:`~gridsampler.algorithms.grid.OutOfDomain`
            If any point lies outside the grid domain.

        """
        return self.interpolate(*self.grid.locate(point))

    def interpolate(self, cells, offsets):
        """Interpolate the corner weights of located points.

        Parameters
        ----------
        cells : tuple of int or int, array_like
            Cell index tuple or cell indices of shape ``(M, grid.ndim)``
            as returned by ``grid.locate``.
        offsets : float, array_like
            Fractional offsets within the cell(s).

        Returns
        -------
        float or float :class:`numpy.ndarray`
            Density value(s).

        """
        offsets = np.asarray(offsets, dtype=float)

        single = offsets.ndim == 1
        offsets = offsets.reshape(-1, self.grid.ndim)

        corner_weights = self.grid.corner_weights(cells)

        # Interpolation factors of shape (M, 2**ndim, ndim).
        factors = np.where(
            self._corner_bits, offsets[:, None, :], 1. - offsets[:, None, :]
        )

        values = np.sum(corner_weights * np.prod(factors, axis=-1), axis=-1)

        return float(values[0]) if single else values
