import logging
import warnings

import numpy as np
import pytest

from gridsampler.__main__ import load_grid, main, parse_cli_args
from gridsampler.algorithms.grid import WeightGrid
from gridsampler.sampler.batch import SamplingWarning
from gridsampler.utils import clean_warning_format

KNOTS = ([0., 1., 2.], [0., 0.5, 1.5, 2.])

WEIGHTS = [
    [0., 1., 2., 0.],
    [0., 3., 1., 1.],
    [0., 0., 0., 4.],
]


@pytest.fixture
def grid_file(tmp_path):
    grid_file = tmp_path / "grid.npz"
    np.savez(
        grid_file, weights=WEIGHTS, knots_0=KNOTS[0], knots_1=KNOTS[1]
    )
    return grid_file


@pytest.fixture
def root_logger(monkeypatch):
    monkeypatch.setattr(warnings, 'formatwarning', warnings.formatwarning)

    logger = logging.getLogger()
    handlers, level = list(logger.handlers), logger.level

    yield logger

    for handler in logger.handlers[:]:
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)


def test_parse_cli_args():
    params = parse_cli_args(['grid.npz', '--count', '5', '--max-tries', '9'])
    assert params.grid == 'grid.npz' and params.count == 5 \
        and params.max_tries == 9 and params.fill is None, \
        "Incorrect parsed command line arguments."


def test_load_grid(grid_file):
    knots, weights = load_grid(grid_file)
    assert len(knots) == 2 and np.array_equal(weights, WEIGHTS), \
        "Incorrect grid loaded."
    assert WeightGrid(knots, weights).shape == (3, 4), \
        "Loaded grid does not make a valid weight grid."


def test_main_draw(grid_file, tmp_path, root_logger, seed):
    output = tmp_path / "samples.npy"
    status = main([
        str(grid_file), '--count', '50', '--seed', str(seed),
        '--output', str(output), '--verbose',
    ])
    samples = np.load(output)
    assert status == 0, "Non-zero exit status for successful draws."
    assert samples.shape == (50, 2) \
        and np.all(WeightGrid(KNOTS, WEIGHTS).contains(samples)), \
        "Incorrect saved samples."
    assert root_logger.level == logging.DEBUG, \
        "Verbose option not applied to the root logger."
    assert warnings.formatwarning is clean_warning_format, \
        "Warning format not cleaned."


def test_main_fill(grid_file, tmp_path, root_logger, seed):
    slot_file = tmp_path / "slots.npz"
    output = tmp_path / "filled.npy"
    matrix = np.array([[0.5, np.nan], [3., np.nan]])
    np.savez(slot_file, matrix=matrix, free=np.isnan(matrix))

    with pytest.warns(SamplingWarning):
        status = main([
            str(grid_file), '--fill', str(slot_file), '--seed', str(seed),
            '--output', str(output),
        ])
    filled = np.load(output)
    assert status == 1, "Zero exit status despite an unfilled slot."
    assert filled[0, 0] == 0.5 and not np.isnan(filled[0, 1]), \
        "Valid slot not filled."
    assert filled[1, 0] == 3. and np.isnan(filled[1, 1]), \
        "Failed slot changed."
