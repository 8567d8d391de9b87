"""
***************************************************************************
Sampler (:mod:`~gridsampler.sampler`)
***************************************************************************

Draw samples from the interpolated density of weight grids, fully or
conditioned on fixed coordinates, singly or in batches.

"""
from .batch import SamplingWarning, draw, draw_into
from .conditional import ConditionalSampler, slice_grid
from .rejection import RejectionSampler
