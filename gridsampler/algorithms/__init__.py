"""
***************************************************************************
Algorithms (:mod:`~gridsampler.algorithms`)
***************************************************************************

Provide weight grid models, multilinear density interpolation, cell
envelope caching and exact grid integration.

"""
from .envelope import EnvelopeCache
from .grid import WeightGrid
from .integration import goodness_of_fit, marginal_cdf, total_mass
from .interpolation import MultilinearDensity
