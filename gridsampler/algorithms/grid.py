"""
Weight grids (:mod:`~gridsampler.algorithms.grid`)
===========================================================================

Model non-negative weight grids on rectilinear lattices and locate
continuous points in their cells.

A weight grid is specified by one strictly increasing knot sequence per
axis and an array of weights aligned to the outer product of the knots.
The lattice cells are the hyperrectangles between adjacent knots and are
identified by tuples of interval indices; a point lying on an interior
knot belongs to the lower-indexed adjacent cell.

.. autosummary::

    WeightGrid

**Exceptions**

.. autosummary::

    GridSamplingError
    ShapeMismatch
    InvalidKnots
    InvalidWeights
    OutOfDomain
    NoFreeAxes
    SamplingExhausted

|

"""
import logging
from itertools import product

import numpy as np


class GridSamplingError(Exception):
    """Base exception raised for invalid weight grids and failed draws.

    """


class ShapeMismatch(GridSamplingError, ValueError):
    """Exception raised when array dimensions do not match the knot
    sequences.

    """


class InvalidKnots(GridSamplingError, ValueError):
    """Exception raised for knot sequences that are too short, not finite
    or not strictly increasing.

    """


class InvalidWeights(GridSamplingError, ValueError):
    """Exception raised for negative or non-finite weights or grids
    carrying no weight at all.

    """


class OutOfDomain(GridSamplingError, ValueError):
    """Exception raised for coordinates outside the knot range of their
    axis.

    """


class NoFreeAxes(GridSamplingError, ValueError):
    """Exception raised when a conditional draw has no coordinate left to
    draw.

    """


class SamplingExhausted(GridSamplingError, RuntimeError):
    """Exception raised when the number of rejected proposals exceeds the
    safety cap.

    """


def _as_knot_sequences(knots):
    """Convert knots to a list of float arrays, one per axis.

    A flat sequence of scalars is taken as the knots of a single axis.

    """
    if np.isscalar(knots):
        raise InvalidKnots("Knots must be a sequence per axis.")

    knots = list(knots)
    if knots and all(np.isscalar(knot) for knot in knots):
        knots = [knots]

    try:
        return [np.array(axis_knots, dtype=float) for axis_knots in knots]
    except (TypeError, ValueError) as err:
        raise InvalidKnots("Knots must be real-valued sequences.") from err


class WeightGrid:
    r"""Non-negative weight grid on a rectilinear lattice.

    The weights :math:`w_{i_1 \dots i_N}` sit at the lattice positions
    :math:`(x^{(1)}_{i_1}, \dots, x^{(N)}_{i_N})` given by the knots of
    each axis, and the grid domain is the hyperrectangle spanned by the
    first and last knot of each axis.

    Parameters
    ----------
    knots : sequence of float, array_like
        Strictly increasing knot sequence for each axis, in the axis
        order of `weights`.  A single flat sequence is accepted for a
        1-d grid.
    weights : float, array_like
        Non-negative weights whose shape equals the lengths of the knot
        sequences.

    Attributes
    ----------
    knots : tuple of float :class:`numpy.ndarray`
        Read-only knot sequences.
    weights : float :class:`numpy.ndarray`
        Read-only weight array.
    lower_bounds, upper_bounds : float :class:`numpy.ndarray`
        Domain bounds along each axis.
    attrs : dict
        Grid attributes including the following keys: 'shape' for the
        weight grid shape and 'domain' for the pairs of domain bounds.

    Raises
    ------
    ShapeMismatch
        If the number of knot sequences or their lengths do not match the
        weight array dimensions.
    InvalidKnots
        If any knot sequence has fewer than two knots, non-finite knots or
        is not strictly increasing.
    InvalidWeights
        If any weight is negative or non-finite, or all weights are zero.

    """

    def __init__(self, knots, weights):

        self.logger = logging.getLogger(self.__class__.__name__)

        weights = np.array(weights, dtype=float)
        knots = _as_knot_sequences(knots)

        self._validate(knots, weights)

        for axis_knots in knots:
            axis_knots.setflags(write=False)
        weights.setflags(write=False)

        self.knots = tuple(knots)
        self.weights = weights

        self.lower_bounds = np.array([axis_knots[0] for axis_knots in knots])
        self.upper_bounds = np.array([axis_knots[-1] for axis_knots in knots])

        self.attrs = {
            'shape': self.shape,
            'domain': [
                (float(low), float(high))
                for low, high in zip(self.lower_bounds, self.upper_bounds)
            ],
        }

        self.logger.debug(
            "%s constructed with %d cells.", self, np.prod(self.cell_shape)
        )

    def __str__(self):

        str_info = ", ".join(
            [f"{name}={val}" for name, val in self.attrs.items()]
        )

        return f"{self.__class__.__name__}({str_info})"

    @property
    def ndim(self):
        """Number of grid axes.

        Returns
        -------
        int

        """
        return self.weights.ndim

    @property
    def shape(self):
        """Weight grid shape.

        Returns
        -------
        tuple of int

        """
        return self.weights.shape

    @property
    def cell_shape(self):
        """Number of cells along each axis.

        Returns
        -------
        tuple of int

        """
        return tuple(length - 1 for length in self.weights.shape)

    @property
    def volume(self):
        """Domain volume.

        Returns
        -------
        float

        """
        return float(np.prod(self.upper_bounds - self.lower_bounds))

    @property
    def max_weight(self):
        """Maximum grid weight.

        Returns
        -------
        float

        """
        return float(self.weights.max())

    def contains(self, point):
        """Indicate whether points lie within the grid domain.

        Parameters
        ----------
        point : float, array_like
            A point of length :attr:`ndim` or an array of points of shape
            ``(M, ndim)``.  A scalar is accepted for a 1-d grid.

        Returns
        -------
        bool or bool :class:`numpy.ndarray`
            `True` if the point lies in the closed domain.  Points with
            non-finite coordinates are never contained.

        """
        points, single = self._as_points(point)

        indication = np.all(
            (points >= self.lower_bounds) & (points <= self.upper_bounds),
            axis=-1
        )

        return bool(indication[0]) if single else indication

    def locate(self, point):
        """Locate points in their lattice cells.

        Parameters
        ----------
        point : float, array_like
            A point of length :attr:`ndim` or an array of points of shape
            ``(M, ndim)``.  A scalar is accepted for a 1-d grid.

        Returns
        -------
        cell : tuple of int or int :class:`numpy.ndarray`
            Cell index tuple for a single point, or an integer array of
            shape ``(M, ndim)`` for an array of points.
        offset : float :class:`numpy.ndarray`
            Fractional offsets ``0 <= offset <= 1`` of the point(s) from
            the lower cell corner along each axis.

        Raises
        ------
        OutOfDomain
            If any coordinate lies outside its axis range.

        """
        points, single = self._as_points(point)

        self._check_domain(points)

        cells = np.empty(points.shape, dtype=np.intp)
        offsets = np.empty(points.shape, dtype=float)
        for axis, axis_knots in enumerate(self.knots):
            coords = points[:, axis]

            # Knots resolve to the lower-indexed adjacent cell.
            idx = np.searchsorted(axis_knots, coords, side='left') - 1
            idx = np.clip(idx, 0, axis_knots.size - 2)

            lower, upper = axis_knots[idx], axis_knots[idx + 1]

            cells[:, axis] = idx
            offsets[:, axis] = (coords - lower) / (upper - lower)

        if single:
            return tuple(int(idx) for idx in cells[0]), offsets[0]

        return cells, offsets

    def corners(self, cell):
        """Return the weights at the corners of a cell.

        Parameters
        ----------
        cell : tuple of int
            Cell index tuple.

        Returns
        -------
        float :class:`numpy.ndarray`
            Corner weights of shape ``(2,) * ndim``, where the lower and
            upper corners along each axis are indexed by 0 and 1.

        Raises
        ------
        IndexError
            If `cell` is not a valid cell index tuple.

        """
        cell = tuple(cell)
        if len(cell) != self.ndim or any(
                not 0 <= idx < length
                for idx, length in zip(cell, self.cell_shape)
        ):
            raise IndexError(f"Invalid cell index {cell} for {self}.")

        return self.weights[tuple(slice(idx, idx + 2) for idx in cell)]

    def corner_weights(self, cells):
        """Return the corner weights of an array of cells.

        Parameters
        ----------
        cells : int, array_like
            Cell indices of shape ``(M, ndim)``.

        Returns
        -------
        float :class:`numpy.ndarray`
            Corner weights of shape ``(M, 2**ndim)``, with the corners
            ordered as ``itertools.product((0, 1), repeat=ndim)``.

        """
        cells = np.asarray(cells, dtype=np.intp).reshape(-1, self.ndim)

        return np.stack(
            [
                self.weights[tuple((cells + np.asarray(corner)).T)]
                for corner in product((0, 1), repeat=self.ndim)
            ],
            axis=-1
        )

    def _as_points(self, point):

        points = np.asarray(point, dtype=float)

        single = points.ndim <= 1
        if points.ndim == 0 and self.ndim == 1:
            points = points.reshape(1, 1)
        elif points.ndim == 1:
            points = points.reshape(1, -1)

        if points.ndim != 2 or points.shape[-1] != self.ndim:
            raise ShapeMismatch(
                f"Point(s) of shape {np.shape(point)} do not match "
                f"the {self.ndim}-d grid."
            )

        return points, single

    def _check_domain(self, points):

        outside = ~(
            (points >= self.lower_bounds) & (points <= self.upper_bounds)
        )
        if np.any(outside):
            point_idx, axis = np.argwhere(outside)[0]
            raise OutOfDomain(
                f"Coordinate {points[point_idx, axis]} lies outside "
                f"the range {self.attrs['domain'][axis]} of axis {axis}."
            )

    @staticmethod
    def _validate(knots, weights):

        if weights.ndim == 0:
            raise ShapeMismatch("Weight grid must have at least one axis.")
        if len(knots) != weights.ndim:
            raise ShapeMismatch(
                f"{len(knots)} knot sequences given "
                f"for a {weights.ndim}-d weight grid."
            )

        for axis, axis_knots in enumerate(knots):
            if axis_knots.ndim != 1 or axis_knots.size < 2:
                raise InvalidKnots(
                    f"Knots of axis {axis} must be a sequence "
                    "of at least two values."
                )
            if not np.all(np.isfinite(axis_knots)):
                raise InvalidKnots(f"Knots of axis {axis} are not finite.")
            if not np.all(np.diff(axis_knots) > 0):
                raise InvalidKnots(
                    f"Knots of axis {axis} are not strictly increasing."
                )

        knot_lengths = tuple(axis_knots.size for axis_knots in knots)
        if weights.shape != knot_lengths:
            raise ShapeMismatch(
                f"Weight grid shape {weights.shape} does not match "
                f"knot lengths {knot_lengths}."
            )

        if not np.all(np.isfinite(weights)):
            raise InvalidWeights("Weights are not finite.")
        if np.any(weights < 0):
            raise InvalidWeights("Weights must be non-negative.")
        if not np.any(weights > 0):
            raise InvalidWeights("Weights are all zero.")
