"""
Batch sampling (:mod:`~gridsampler.sampler.batch`)
===========================================================================

Draw batches of samples from a weight grid, or fill in the missing
coordinates of a matrix of partially specified points in place.

Rows of a sample matrix are slots, i.e. points, and columns are grid
axes.  All draws in one call share a single grid.  Slots conditioned on
identical fixed coordinates share one conditional sampler, so there is
one envelope cache per distinct conditioning.

.. autosummary::

    draw
    draw_into
    SamplingWarning

|

"""
import logging
import sys
import warnings

import numpy as np
from tqdm import tqdm

from gridsampler.algorithms.grid import (
    InvalidWeights,
    OutOfDomain,
    SamplingExhausted,
    ShapeMismatch,
    WeightGrid,
)
from gridsampler.sampler.conditional import ConditionalSampler
from gridsampler.sampler.rejection import RejectionSampler
from gridsampler.utils import random_generator

logger = logging.getLogger(__name__)

_SEGMENT_SIZE = 65536


class SamplingWarning(UserWarning):
    """Emit a warning when slots of a sample matrix could not be filled.

    """


def draw(knots, weights, count, seed=None, max_tries=1000000,
         progress=False):
    """Draw independent samples from the interpolated density of a weight
    grid.

    Parameters
    ----------
    knots : sequence of float, array_like
        Strictly increasing knot sequence for each axis.
    weights : float, array_like
        Non-negative weights whose shape equals the knot lengths.
    count : int
        Number of samples, ``count >= 0``.
    seed : int, :class:`numpy.random.Generator` or None, optional
        Random seed or generator (default is `None`).
    max_tries : int, optional
        Safety cap on the number of proposals per sample (default is
        1000000).
    progress : bool, optional
        If `True` (default is `False`), display a progress bar.

    Returns
    -------
    samples : float :class:`numpy.ndarray`
        Samples of shape ``(count, ndim)``.

    Raises
    ------
    ValueError
        If `count` is negative.

    Examples
    --------
    >>> samples = draw(([0, 1, 2],), [0, 1, 0], 1000, seed=42)
    >>> samples.shape
    (1000, 1)

    """
    count = int(count)
    if count < 0:
        raise ValueError("Sample `count` must be non-negative.")

    grid = WeightGrid(knots, weights)
    sampler = RejectionSampler(grid, seed=seed, max_tries=max_tries)

    samples = np.empty((count, grid.ndim), dtype=float)
    with tqdm(total=count, mininterval=1, desc="Drawing samples",
              file=sys.stdout, disable=not progress) as progress_bar:
        for segment in _segments(count, _SEGMENT_SIZE):
            samples[segment] = sampler.sample(segment.stop - segment.start)
            progress_bar.update(segment.stop - segment.start)

    logger.info(
        "%d samples drawn from %s with %d proposals.",
        count, grid, sampler.num_proposed
    )

    return samples


def draw_into(matrix, knots, weights, free=None, seed=None,
              max_tries=1000000, progress=False):
    """Fill in the missing coordinates of a sample matrix in place.

    Each slot (row) of `matrix` with missing coordinates receives a draw
    from the interpolated density conditioned on its remaining, fixed
    coordinates; slots with all coordinates missing receive a draw from
    the full density.  Slots without missing coordinates are left as
    they are.

    Failures confined to a slot, i.e. a fixed coordinate outside its axis
    range, a slice carrying no weight or exhausted proposals, leave that
    slot unchanged and do not affect other slots.  They are logged,
    summarised in a :class:`SamplingWarning` and returned.

    Parameters
    ----------
    matrix : float :class:`numpy.ndarray` or :class:`numpy.ma.MaskedArray`
        Sample matrix of shape ``(count, ndim)``.  If a masked array,
        masked entries are missing and become unmasked when filled.
    knots : sequence of float, array_like
        Strictly increasing knot sequence for each axis.
    weights : float, array_like
        Non-negative weights whose shape equals the knot lengths.
    free : bool, array_like or None, optional
        Mask of missing coordinates of the same shape as `matrix`.  If
        `None` (default), the mask of the masked array `matrix` is used.
    seed : int, :class:`numpy.random.Generator` or None, optional
        Random seed or generator (default is `None`).
    max_tries : int, optional
        Safety cap on the number of proposals per sample (default is
        1000000).
    progress : bool, optional
        If `True` (default is `False`), display a progress bar.

    Returns
    -------
    failures : dict
        Exceptions raised for the slots that could not be filled, accessed
        by slot index.

    Raises
    ------
    TypeError
        If `free` is not given for an unmasked `matrix`, or `matrix` does
        not have a floating-point type.
    :class:`~gridsampler.algorithms.grid.ShapeMismatch`
        If `matrix` or `free` is not of shape ``(count, ndim)``.

    """
    grid = WeightGrid(knots, weights)

    if free is None:
        if not isinstance(matrix, np.ma.MaskedArray):
            raise TypeError(
                "`free` must be given unless `matrix` is a masked array."
            )
        free = np.ma.getmaskarray(matrix)
    free = np.array(free, dtype=bool)

    if not np.issubdtype(matrix.dtype, np.floating):
        raise TypeError("`matrix` must have a floating-point type.")
    if matrix.ndim != 2 or matrix.shape[-1] != grid.ndim \
            or free.shape != matrix.shape:
        raise ShapeMismatch(
            f"Sample matrix of shape {matrix.shape} and mask of shape "
            f"{free.shape} do not match the {grid.ndim}-d grid."
        )

    rng = random_generator(seed)

    values = np.array(np.ma.getdata(matrix), dtype=float)

    slot_groups = _group_slots(values, free)

    failures = {}
    with tqdm(total=sum(map(len, slot_groups.values())), mininterval=1,
              desc="Filling slots", file=sys.stdout,
              disable=not progress) as progress_bar:
        for slots in slot_groups.values():
            slot_free = free[slots[0]]
            try:
                if np.all(slot_free):
                    sampler = RejectionSampler(
                        grid, seed=rng, max_tries=max_tries
                    )
                else:
                    sampler = ConditionalSampler(
                        grid, values[slots[0]], slot_free,
                        seed=rng, max_tries=max_tries
                    )
                drawn = sampler.sample(len(slots))
            except (OutOfDomain, InvalidWeights, SamplingExhausted) as err:
                for slot in slots:
                    failures[slot] = err
                    logger.warning("Slot %d not filled: %s", slot, err)
            else:
                matrix[np.ix_(slots, np.flatnonzero(slot_free))] = \
                    drawn[:, slot_free]
            progress_bar.update(len(slots))

    if failures:
        warnings.warn(
            f"{len(failures)} of {len(matrix)} slots could not be filled.",
            SamplingWarning
        )

    logger.info(
        "%d slots filled in %d groups from %s.",
        sum(map(len, slot_groups.values())) - len(failures),
        len(slot_groups), grid
    )

    return failures


def _group_slots(values, free):
    """Group slots with missing coordinates by their conditioning.

    Parameters
    ----------
    values : float :class:`numpy.ndarray`
        Sample matrix values.
    free : bool :class:`numpy.ndarray`
        Mask of missing coordinates.

    Returns
    -------
    dict
        Lists of slot indices sharing the same missing axes and fixed
        coordinates, in order of first appearance.

    """
    slot_groups = {}
    for slot, (slot_values, slot_free) in enumerate(zip(values, free)):
        if not np.any(slot_free):
            continue
        conditioning = (
            slot_free.tobytes(), slot_values[~slot_free].tobytes()
        )
        slot_groups.setdefault(conditioning, []).append(slot)

    return slot_groups


def _segments(total, segment_size):

    breakpoints = list(range(0, total, segment_size)) + [total]

    return [
        slice(start, stop)
        for start, stop in zip(breakpoints[:-1], breakpoints[1:])
    ]
