"""
Rejection sampling (:mod:`~gridsampler.sampler.rejection`)
===========================================================================

Draw samples from the interpolated density of a weight grid by rejection
sampling under the largest grid weight.

Each proposal is a point drawn uniformly over the grid domain paired
with a height drawn uniformly below the largest weight, and is accepted
if the height falls under the density at the point.  Accepted points
therefore follow the interpolated density exactly.  Heights above the
envelope of the proposal cell are rejected before the density is
evaluated, and the cell envelopes visited are cached for all subsequent
draws.

.. autosummary::

    RejectionSampler

|

"""
import logging

import numpy as np

from gridsampler.algorithms.envelope import EnvelopeCache
from gridsampler.algorithms.grid import SamplingExhausted
from gridsampler.algorithms.integration import total_mass
from gridsampler.algorithms.interpolation import MultilinearDensity
from gridsampler.utils import random_generator


class RejectionSampler:
    r"""Rejection sampler of the interpolated density of a weight grid.

    Proposals are tested in vectorised blocks whose size adapts to the
    observed acceptance rate; accepted proposals are used in the order
    they were drawn, so every returned point is an independent draw.

    The expected number of proposals per sample is

    .. math::

        \frac{V \max w}{\int f(x) \,\mathrm{d}x} \,,

    where :math:`V` is the domain volume and :math:`\max w` the largest
    weight.

    Parameters
    ----------
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid.
    cache : :class:`~gridsampler.algorithms.envelope.EnvelopeCache` *or None, optional*
        Envelope cache of `grid` to be shared with other samplers.  If
        `None` (default), a new cache is created.
    seed : int, :class:`numpy.random.Generator` or None, optional
        Random seed or generator (default is `None`).
    max_tries : int, optional
        Safety cap on the number of proposals per requested sample
        (default is 1000000).

    Attributes
    ----------
    grid : :class:`~gridsampler.algorithms.grid.WeightGrid`
        Weight grid.
    density : :class:`~gridsampler.algorithms.interpolation.MultilinearDensity`
        Interpolated density of `grid`.
    cache : :class:`~gridsampler.algorithms.envelope.EnvelopeCache`
        Envelope cache of `grid`.
    acceptance_rate : float
        Probability that a proposal is accepted.
    num_proposed, num_evaluated, num_accepted : int
        Numbers of proposals made, proposals whose density was evaluated
        and samples returned.
    attrs : dict
        Sampler attributes inherited from input parameters.

    Raises
    ------
    ValueError
        If `cache` belongs to a different grid or `max_tries` is not
        positive.

    """

    _min_block = 64
    _max_block = 65536

    def __init__(self, grid, cache=None, seed=None, max_tries=1000000):

        self.logger = logging.getLogger(self.__class__.__name__)

        if cache is None:
            cache = EnvelopeCache(grid)
        elif cache.grid is not grid:
            raise ValueError("Envelope `cache` belongs to a different grid.")

        if int(max_tries) < 1:
            raise ValueError("`max_tries` must be a positive integer.")

        self.grid = grid
        self.density = MultilinearDensity(grid)
        self.cache = cache

        self.attrs = {
            'shape': grid.shape,
            'seed': seed if not isinstance(seed, np.random.Generator)
                    else 'shared',
            'max_tries': int(max_tries),
        }

        self.acceptance_rate = \
            total_mass(grid) / (grid.volume * grid.max_weight)

        self.num_proposed = 0
        self.num_evaluated = 0
        self.num_accepted = 0

        self._num_passed = 0
        self._rng = random_generator(seed)

        self.logger.debug(
            "%s initialised with acceptance rate %.3g.",
            self, self.acceptance_rate
        )

    def __str__(self):

        str_info = ", ".join(
            [f"{name}={val}" for name, val in self.attrs.items()]
        )

        return f"{self.__class__.__name__}({str_info})"

    def sample(self, size=None):
        """Draw samples from the interpolated density.

        Parameters
        ----------
        size : int or None, optional
            Number of samples.  If `None` (default), a single sample is
            drawn.

        Returns
        -------
        float :class:`numpy.ndarray`
            A sample point of shape ``(grid.ndim,)`` if `size` is `None`,
            otherwise samples of shape ``(size, grid.ndim)``.

        Raises
        ------
        ValueError
            If `size` is negative.
        :class:`~gridsampler.algorithms.grid.SamplingExhausted`
            If the number of proposals exceeds `max_tries` per requested
            sample.

        """
        num_sample = 1 if size is None else int(size)
        if num_sample < 0:
            raise ValueError("Sample `size` must be non-negative.")

        samples = np.empty((num_sample, self.grid.ndim), dtype=float)

        max_proposals = self.attrs['max_tries'] * num_sample

        num_filled, num_proposed = 0, 0
        while num_filled < num_sample:
            if num_proposed >= max_proposals:
                raise SamplingExhausted(
                    f"{num_proposed} proposals made for {num_sample} "
                    f"samples but only {num_filled} accepted."
                )

            block_size = min(
                self._block_size(num_sample - num_filled),
                max_proposals - num_proposed
            )

            accepted = self._propose(block_size)[:num_sample - num_filled]

            samples[num_filled:num_filled + len(accepted)] = accepted

            num_filled += len(accepted)
            num_proposed += block_size

        self.num_accepted += num_sample

        self.logger.debug(
            "%d samples drawn from %d proposals; %s.",
            num_sample, num_proposed, self.cache
        )

        return samples[0] if size is None else samples

    def _propose(self, block_size):

        proposals = self._rng.uniform(
            self.grid.lower_bounds, self.grid.upper_bounds,
            size=(block_size, self.grid.ndim)
        )
        heights = self.grid.max_weight * self._rng.uniform(size=block_size)

        cells, offsets = self.grid.locate(proposals)

        # The cell envelope bounds the density, so heights at or above it
        # are rejected unevaluated.
        candidates = np.flatnonzero(heights < self.cache.envelopes(cells))

        values = self.density.interpolate(
            cells[candidates], offsets[candidates]
        )

        accepted = proposals[candidates[heights[candidates] < values]]

        self.num_proposed += block_size
        self.num_evaluated += len(candidates)
        self._num_passed += len(accepted)

        return accepted

    def _block_size(self, num_remaining):

        if self._num_passed:
            rate = self._num_passed / self.num_proposed
        else:
            rate = self.acceptance_rate

        expected_size = np.ceil(1.2 * num_remaining / rate)

        return int(min(max(expected_size, self._min_block), self._max_block))
