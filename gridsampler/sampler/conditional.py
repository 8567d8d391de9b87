"""
Conditional sampling (:mod:`~gridsampler.sampler.conditional`)
===========================================================================

Draw the free coordinates of partially specified points from the
interpolated density of a weight grid conditioned on the fixed
coordinates.

Clamping some axes of a multilinear function leaves a multilinear
function of the remaining axes, whose corner values are obtained by
interpolating the grid weights across the clamped axes.  The conditional
density is therefore itself a weight grid over the free axes and is
sampled with the same rejection machinery.

.. autosummary::

    slice_grid
    ConditionalSampler

|

"""
import logging

import numpy as np

from gridsampler.algorithms.grid import (
    InvalidWeights,
    NoFreeAxes,
    ShapeMismatch,
    WeightGrid,
)
from gridsampler.sampler.rejection import RejectionSampler


def _as_conditioning(grid, point, free):

    point = np.array(point, dtype=float).reshape(-1)
    free = np.array(free, dtype=bool).reshape(-1)

    if point.size != grid.ndim or free.size != grid.ndim:
        raise ShapeMismatch(
            f"Point of length {point.size} and mask of length {free.size} "
            f"do not match the {grid.ndim}-d grid."
        )
    if not np.any(free):
        raise NoFreeAxes("All coordinates of the point are fixed.")

    return point, free


def slice_grid(grid, point, free):
    """Slice a weight grid at the fixed coordinates of a point.

    Parameters
    ----------
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid.
    point : float, array_like
        Point of length ``grid.ndim``.  Coordinates along free axes are
        ignored and may be NaN.
    free : bool, array_like
        Mask of the axes to be drawn.

    Returns
    -------
    :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid over the free axes whose weights are the interpolated
        density of `grid` at the fixed coordinates.

    Raises
    ------
    :class:`~gridsampler.algorithms.grid.NoFreeAxes`
        If no axis is free.
    :class:`~gridsampler.algorithms.grid.OutOfDomain`
        If a fixed coordinate lies outside its axis range.
    :class:`~gridsampler.algorithms.grid.InvalidWeights`
        If the slice carries no weight.

    """
    point, free = _as_conditioning(grid, point, free)

    # Free coordinates are parked at the domain corner for locating.
    cell, offset = grid.locate(np.where(free, grid.lower_bounds, point))

    weights = grid.weights
    for axis in reversed(np.flatnonzero(~free)):
        lower_weights = np.take(weights, cell[axis], axis=axis)
        upper_weights = np.take(weights, cell[axis] + 1, axis=axis)
        weights = (1. - offset[axis]) * lower_weights \
            + offset[axis] * upper_weights

    knots = [grid.knots[axis] for axis in np.flatnonzero(free)]

    try:
        return WeightGrid(knots, weights)
    except InvalidWeights as err:
        raise InvalidWeights(
            f"Grid slice at fixed coordinates {point[~free].tolist()} "
            "carries no weight."
        ) from err


class ConditionalSampler:
    """Conditional sampler of the free coordinates of a point.

    Parameters
    ----------
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid.
    point : float, array_like
        Point of length ``grid.ndim`` holding the fixed coordinates.
        Coordinates along free axes are ignored and may be NaN.
    free : bool, array_like
        Mask of the axes to be drawn.
    seed : int, :class:`numpy.random.Generator` or None, optional
        Random seed or generator (default is `None`).
    max_tries : int, optional
        Safety cap on the number of proposals per requested sample
        (default is 1000000).

    Attributes
    ----------
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Full weight grid.
    point : float :class:`numpy.ndarray`
        Read-only copy of the conditioning point.
    free : bool :class:`numpy.ndarray`
        Read-only mask of the free axes.
    reduced_grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid sliced at the fixed coordinates.
    sampler : :class:`~gridsampler.sampler.rejection.RejectionSampler`
        Rejection sampler over `reduced_grid`; its envelope cache is
        shared by all draws from this conditional sampler.

    Raises
    ------
    :class:`~gridsampler.algorithms.grid.NoFreeAxes`
        If no axis is free.
    :class:`~gridsampler.algorithms.grid.OutOfDomain`
        If a fixed coordinate lies outside its axis range.
    :class:`~gridsampler.algorithms.grid.InvalidWeights`
        If the grid carries no weight at the fixed coordinates.

    See Also
    --------
    :func:`slice_grid`

    """

    def __init__(self, grid, point, free, seed=None, max_tries=1000000):

        self.logger = logging.getLogger(self.__class__.__name__)

        point, free = _as_conditioning(grid, point, free)
        point[free] = np.nan
        point.setflags(write=False)
        free.setflags(write=False)

        self.grid = grid
        self.point = point
        self.free = free

        self.reduced_grid = slice_grid(grid, point, free)
        self.sampler = RejectionSampler(
            self.reduced_grid, seed=seed, max_tries=max_tries
        )

        self.logger.debug("%s initialised.", self)

    def __str__(self):

        str_info = "fixed={}, free_axes={}".format(
            {
                int(axis): float(self.point[axis])
                for axis in np.flatnonzero(~self.free)
            },
            np.flatnonzero(self.free).tolist()
        )

        return f"{self.__class__.__name__}({str_info})"

    def density(self, coords):
        """Evaluate the unnormalised conditional density.

        Parameters
        ----------
        coords : float, array_like
            Free coordinates of shape ``(num_free,)`` or
            ``(M, num_free)``.

        Returns
        -------
        float or float :class:`numpy.ndarray`
            Interpolated density of the full grid at the fixed coordinates
            and `coords`.

        """
        return self.sampler.density(coords)

    def sample(self, size=None):
        """Draw the free coordinates.

        Parameters
        ----------
        size : int or None, optional
            Number of samples.  If `None` (default), a single sample is
            drawn.

        Returns
        -------
        float :class:`numpy.ndarray`
            Completed point of shape ``(grid.ndim,)`` if `size` is `None`,
            otherwise completed points of shape ``(size, grid.ndim)``.
            Fixed coordinates are copied unchanged.

        """
        drawn = self.sampler.sample(size)

        if size is None:
            completed = self.point.copy()
        else:
            completed = np.tile(self.point, (len(drawn), 1))

        completed[..., self.free] = drawn

        return completed
