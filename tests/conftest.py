import random

import pytest

from bfibe.bonehfranklin import boneh_franklin_component_factory, boneh_franklin_initializer
from bfibe.curve import type_one_curve

# p = 12 * 7 * q - 1, small enough to pair in milliseconds
TOY_P = 84000251
TOY_Q = 1000003
TOY_COFACTOR = 84


def pytest_addoption(parser):
    parser.addoption("--runslow", action="store_true", default=False,
                     help="run setup at the larger security levels")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="needs --runslow")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def rng():
    return random.Random(5091)


@pytest.fixture
def toy_curve():
    return type_one_curve.of_order(TOY_P)


@pytest.fixture
def toy_setup(rng, toy_curve):
    return boneh_franklin_initializer(rng).build_setup(toy_curve, TOY_Q, "SHA-256", TOY_COFACTOR)


@pytest.fixture
def toy_factory(rng):
    return boneh_franklin_component_factory(rng)
