"""
Command-line sampling (:mod:`~gridsampler.__main__`)
===========================================================================

Draw samples from a weight grid stored in a ``.npz`` file, or fill in the
missing coordinates of a stored sample matrix, and save the results as a
``.npy`` file::

    python -m gridsampler grid.npz --count 10000 --seed 42 --output out.npy
    python -m gridsampler grid.npz --fill slots.npz --output filled.npy

The grid file holds a ``weights`` array and one ``knots_<axis>`` array per
axis.  The slot file holds a ``matrix`` array and a boolean ``free`` mask
of the same shape.

.. autosummary::

    parse_cli_args
    load_grid
    main

|

"""
import logging
import sys
import warnings
from argparse import ArgumentParser

import numpy as np

from gridsampler.sampler.batch import draw, draw_into
from gridsampler.utils import clean_warning_format, setup_logger


def parse_cli_args(argv=None):
    """Parse command line arguments.

    Parameters
    ----------
    argv : list of str or None, optional
        Command line arguments (default is `None`, in which case
        ``sys.argv`` is used).

    Returns
    -------
    :class:`argparse.Namespace`
        Parsed parameters.

    """
    cli_parser = ArgumentParser(
        prog='gridsampler',
        description="Sample from an interpolated weight grid."
    )

    cli_parser.add_argument('grid', help="weight grid '.npz' file")
    cli_parser.add_argument('--fill', default=None, help="slot '.npz' file")
    cli_parser.add_argument('--count', type=int, default=1000)
    cli_parser.add_argument('--seed', type=int, default=None)
    cli_parser.add_argument('--max-tries', type=int, default=1000000)
    cli_parser.add_argument('--output', default="samples.npy")
    cli_parser.add_argument('--progress', action='store_true')
    cli_parser.add_argument('--verbose', action='store_true')

    return cli_parser.parse_args(argv)


def load_grid(grid_file):
    """Load knot sequences and weights from a ``.npz`` file.

    Parameters
    ----------
    grid_file : str or :class:`pathlib.Path`
        Grid file holding ``weights`` and ``knots_0``, ``knots_1``, ...

    Returns
    -------
    knots : list of float :class:`numpy.ndarray`
        Knot sequences.
    weights : float :class:`numpy.ndarray`
        Weight array.

    """
    with np.load(grid_file) as grid_data:
        weights = grid_data['weights']
        knots = [grid_data[f'knots_{axis}'] for axis in range(weights.ndim)]

    return knots, weights


def main(argv=None):
    """Run command-line sampling.

    Parameters
    ----------
    argv : list of str or None, optional
        Command line arguments (default is `None`, in which case
        ``sys.argv`` is used).

    Returns
    -------
    int
        Exit status: 0 if every sample was drawn, 1 if any slot could not
        be filled.

    """
    params = parse_cli_args(argv)

    warnings.formatwarning = clean_warning_format
    logger = setup_logger(
        logging.DEBUG if params.verbose else logging.INFO
    )

    knots, weights = load_grid(params.grid)

    failures = {}
    if params.fill is None:
        samples = draw(
            knots, weights, params.count, seed=params.seed,
            max_tries=params.max_tries, progress=params.progress
        )
    else:
        with np.load(params.fill) as slot_data:
            samples = np.array(slot_data['matrix'], dtype=float)
            free = np.array(slot_data['free'], dtype=bool)
        failures = draw_into(
            samples, knots, weights, free=free, seed=params.seed,
            max_tries=params.max_tries, progress=params.progress
        )

    np.save(params.output, samples)

    logger.info("%d samples saved to %s.", len(samples), params.output)

    return int(bool(failures))


if __name__ == '__main__':
    sys.exit(main())
