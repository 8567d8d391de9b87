from itertools import product

import numpy as np
import pytest

from gridsampler.algorithms.envelope import EnvelopeCache
from gridsampler.algorithms.interpolation import MultilinearDensity

from . import NamedGrid, random_knots


@pytest.fixture(scope='module')
def triangle():
    return NamedGrid("triangle", ([0., 1., 2.],), [0., 1., 0.])


@pytest.fixture(scope='module')
def plane():
    rng = np.random.default_rng(3)
    return NamedGrid(
        "random 2-d grid",
        random_knots((5, 4), seed=3),
        rng.uniform(0., 5., size=(5, 4))
    )


@pytest.mark.parametrize(
    "cell,value",
    [
        ((0,), 1.),
        ((1,), 1.),
    ]
)
def test_EnvelopeCache_triangle(triangle, cell, value):
    assert EnvelopeCache(triangle.grid).envelope(cell) == value, \
        f"Incorrect cell envelope for the {triangle} grid."


class TestEnvelopeCache:

    def test_corner_maximum(self, plane):
        cache = EnvelopeCache(plane.grid)
        for i, j in product(*map(range, plane.grid.cell_shape)):
            assert cache[i, j] == np.max(
                plane.grid.weights[i:i + 2, j:j + 2]
            ), f"Envelope is not the corner maximum of cell {(i, j)}."

    def test_density_bound(self, plane):
        rng = np.random.default_rng(5)
        points = rng.uniform(
            plane.grid.lower_bounds, plane.grid.upper_bounds, size=(2000, 2)
        )
        cells, _ = plane.grid.locate(points)
        values = MultilinearDensity(plane.grid)(points)
        assert np.all(EnvelopeCache(plane.grid).envelopes(cells) >= values), \
            "Cell envelope does not bound the interpolated density."

    def test_memoisation(self, plane):
        cache = EnvelopeCache(plane.grid)
        cache.envelope((0, 0))
        cache.envelope((0, 0))
        cache.envelope((1, 2))
        assert len(cache) == 2 and (0, 0) in cache and (2, 2) not in cache, \
            "Incorrect cache entries for EnvelopeCache test instance."
        assert (cache.hits, cache.misses) == (1, 2), \
            "Incorrect cache counters for EnvelopeCache test instance."

    def test_envelopes(self, plane):
        cache = EnvelopeCache(plane.grid)
        cells = [[0, 0], [3, 2], [0, 0], [1, 1]]
        assert np.array_equal(
            cache.envelopes(cells), [cache[cell] for cell in cells]
        ), "Vectorised envelopes disagree with cellwise envelopes."
        assert len(cache) == 3, \
            "Distinct cells not looked up once each."
        assert cache.envelopes(np.empty((0, 2), dtype=int)).size == 0, \
            "Envelopes of no cells should be empty."

    def test_clear(self, plane):
        cache = EnvelopeCache(plane.grid)
        cache.envelopes([[0, 0], [1, 1]])
        cache.clear()
        assert len(cache) == 0 and cache.misses == 0, \
            "EnvelopeCache test instance not cleared."
