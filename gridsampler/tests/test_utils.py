import logging

import numpy as np
import pytest

import gridsampler.utils as u


@pytest.mark.parametrize(
    "seed",
    [None, 0, 12345]
)
def test_random_generator(seed):
    assert isinstance(u.random_generator(seed), np.random.Generator), \
        "Random generator not returned."


def test_random_generator_passthrough():
    rng = np.random.default_rng(0)
    assert u.random_generator(rng) is rng, \
        "Existing random generator not passed through."


def test_random_generator_reproducibility():
    assert u.random_generator(7).uniform() == u.random_generator(7).uniform(), \
        "Random generators from the same seed disagree."


@pytest.mark.parametrize(
    "filename,value",
    [
        (
            "/usr/lib/site-packages/gridsampler/sampler/batch.py",
            "gridsampler/sampler/batch.py:10: UserWarning: message\n"
        ),
        ("/tmp/script.py", "/tmp/script.py:10: UserWarning: message\n"),
    ]
)
def test_clean_warning_format(filename, value):
    assert u.clean_warning_format("message", UserWarning, filename, 10) \
        == value, "Incorrect warning format."


@pytest.mark.parametrize("level", [logging.INFO, logging.DEBUG])
def test_setup_logger(level):
    root_level = logging.getLogger().level
    logger = u.setup_logger(level)
    try:
        assert logger is logging.getLogger(), "Root logger not returned."
        assert logger.level == level, "Incorrect logging level."
        assert isinstance(
            logger.handlers[-1].formatter, u._LoggerFormatter
        ), "Logger not formatted with elapsed time."
        record = logging.LogRecord(
            'test', logging.INFO, __file__, 1, "message", None, None
        )
        assert "(+" in logger.handlers[-1].format(record), \
            "Elapsed time missing from logging record."
    finally:
        logger.removeHandler(logger.handlers[-1])
        logger.setLevel(root_level)
