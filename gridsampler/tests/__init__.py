"""
***************************************************************************
Unit testing (:mod:`~gridsampler.tests`)
***************************************************************************

Unit testing with `pytest` in Python 3.6 or above.  Statistical tests use
seeded random generators and compare samples with exact distributions at
the significance level :data:`SIGNIFICANCE`.

"""
import numpy as np

from gridsampler.algorithms.grid import WeightGrid

SIGNIFICANCE = 1.e-3


def random_knots(lengths, seed=None):
    """Return random strictly increasing knot sequences.

    Parameters
    ----------
    lengths : sequence of int
        Number of knots per axis.
    seed : int or None, optional
        Random seed (default is `None`).

    Returns
    -------
    list of float :class:`numpy.ndarray`
        Knot sequences.

    """
    rng = np.random.default_rng(seed)

    return [
        np.cumsum(rng.uniform(0.5, 1.5, size=length)) - 2.
        for length in lengths
    ]


class NamedGrid:
    """Named weight grids.

    Parameters
    ----------
    name: Name of the grid.
    knots: Knot sequences.
    weights: Weight array.

    Attributes
    ----------
    name: Name of the grid.
    grid: Weight grid.

    """
    name: str
    grid: WeightGrid

    def __init__(self, name: str, knots, weights):
        self.name = name
        self.knots = knots
        self.weights = weights
        self.grid = WeightGrid(knots, weights)

    def __str__(self):
        return self.name
