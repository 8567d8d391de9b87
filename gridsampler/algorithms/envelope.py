"""
Cell envelopes (:mod:`~gridsampler.algorithms.envelope`)
===========================================================================

Bound the interpolated density of a weight grid cell by cell for
rejection sampling.

The multilinear interpolant attains its maximum over a closed cell at one
of the cell corners, so the largest corner weight is the exact supremum
of the density in the cell.  Envelopes are computed only for the cells
that proposals actually visit and are memoised for the lifetime of the
cache.

.. autosummary::

    EnvelopeCache

|

"""
import logging

import numpy as np


class EnvelopeCache:
    """Memoised cell envelopes of a weight grid.

    The cache may be shared by any number of draws from the same grid.
    Storing an envelope is idempotent, so concurrent lookups that compute
    the same cell twice leave the cache unchanged.

    Parameters
    ----------
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid.

    Attributes
    ----------
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid.
    hits, misses : int
        Numbers of cached and newly computed envelope lookups.

    """

    def __init__(self, grid):

        self.logger = logging.getLogger(self.__class__.__name__)

        self.grid = grid

        self.hits = 0
        self.misses = 0

        self._envelopes = {}

    def __str__(self):

        str_info = "cells={}/{}".format(
            len(self), int(np.prod(self.grid.cell_shape))
        )

        return f"{self.__class__.__name__}({str_info})"

    def __len__(self):

        return len(self._envelopes)

    def __contains__(self, cell):

        return tuple(int(idx) for idx in cell) in self._envelopes

    def __getitem__(self, cell):

        return self.envelope(cell)

    def envelope(self, cell):
        """Return the density envelope of a cell.

        Parameters
        ----------
        cell : tuple of int
            Cell index tuple.

        Returns
        -------
        float
            Maximum corner weight of the cell.

        """
        cell = tuple(int(idx) for idx in cell)

        try:
            value = self._envelopes[cell]
        except KeyError:
            value = float(np.max(self.grid.corners(cell)))
            self._envelopes[cell] = value
            self.misses += 1
        else:
            self.hits += 1

        return value

    def envelopes(self, cells):
        """Return the density envelopes of an array of cells.

        Each distinct cell is looked up once.

        Parameters
        ----------
        cells : int, array_like
            Cell indices of shape ``(M, grid.ndim)``.

        Returns
        -------
        float :class:`numpy.ndarray`
            Envelope values of shape ``(M,)``.

        """
        cells = np.asarray(cells, dtype=np.intp).reshape(-1, self.grid.ndim)
        if not cells.size:
            return np.empty(0, dtype=float)

        distinct_cells, inverse = np.unique(
            cells, axis=0, return_inverse=True
        )

        distinct_values = np.array(
            [self.envelope(cell) for cell in distinct_cells], dtype=float
        )

        return distinct_values[np.ravel(inverse)]

    def clear(self):
        """Empty the cache.

        """
        self._envelopes.clear()
        self.hits = 0
        self.misses = 0

        self.logger.debug("%s cleared.", self)
