"""
###########################################################################
``GridSampler`` | Rejection sampling from interpolated weight grids
###########################################################################

``GridSampler`` is a Python package that draws random coordinate vectors
from a non-negative weight grid on a rectilinear lattice, treating the
grid as a multilinearly interpolated probability surface, and fills in
missing coordinates of partially specified points by conditional
sampling.

.. topic:: Licence Statement

    Copyright (C) 2020, M S Wang

    This program is free software: you can redistribute it and/or modify it
    under the terms of the GNU General Public License as published by the
    Free Software Foundation, either version 3 of the License, or (at your
    option) any later version.

    This program is distributed in the hope that it will be useful, but
    WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
    General Public License for more details.

    You should have received a copy of the GNU General Public License along
    with this program.  If not, see `<https://www.gnu.org/licenses/>`_.

"""
from .algorithms.envelope import EnvelopeCache
from .algorithms.grid import (
    GridSamplingError,
    InvalidKnots,
    InvalidWeights,
    NoFreeAxes,
    OutOfDomain,
    SamplingExhausted,
    ShapeMismatch,
    WeightGrid,
)
from .algorithms.interpolation import MultilinearDensity
from .sampler.batch import SamplingWarning, draw, draw_into
from .sampler.conditional import ConditionalSampler, slice_grid
from .sampler.rejection import RejectionSampler

__author__ = "Mike S Wang"
__contact__ = "Mike S Wang"
__copyright__ = "Copyright 2020, GridSampler/M S Wang"
__date__ = "2020/06/01"
__description__ = "Rejection sampling from interpolated weight grids."
__email__ = "mike.wang@port.ac.uk"
__license__ = "GPLv3"
__url__ = "https://github.com/MikeSWang/GridSampler/"
__version__ = "0.1.0"
