"""
Test Configuration and Fixtures

Provides:
- Deterministic trapdoor material built from small known safe primes
- Accumulators over that trapdoor with predictable element exponents
- Freshly generated 64-bit accumulators
"""

import os
import sys
from typing import Callable, Iterator, List

import pytest

try:
    from trapdoor_accum.accumulator import Accumulator
    from trapdoor_accum.config import AccumulatorSettings, reset_settings
    from trapdoor_accum.trapdoor import Trapdoor
except ImportError:
    sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
    from accumulator import Accumulator
    from config import AccumulatorSettings, reset_settings
    from trapdoor import Trapdoor

# p = 2 * 509 + 1, q = 2 * 1013 + 1
SMALL_P = 1019
SMALL_Q = 2027

# Primes coprime to 509 * 1013, handed out in order as element exponents
SMALL_EXPONENTS = [65537, 65539, 65543, 65551, 65557, 65563, 65579, 65581]


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: large-parameter tests")


def sequence_generator(primes: List[int]) -> Callable[[int], int]:
    """Prime generator stub that returns ``primes`` one after another."""
    it: Iterator[int] = iter(primes)

    def generate(bits: int) -> int:
        return next(it)

    return generate


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings() -> AccumulatorSettings:
    return AccumulatorSettings()


@pytest.fixture
def small_trapdoor() -> Trapdoor:
    return Trapdoor.from_primes(SMALL_P, SMALL_Q)


@pytest.fixture
def small_acc(small_trapdoor, settings) -> Accumulator:
    """Accumulator over the small trapdoor with fixed initial value and exponents."""
    return Accumulator(
        small_trapdoor,
        settings=settings,
        initial=12345,
        prf_key=0xC0FFEE,
        prime_generator=sequence_generator(SMALL_EXPONENTS),
    )


@pytest.fixture
def acc64(settings) -> Accumulator:
    """Freshly generated accumulator over 64-bit safe primes."""
    return Accumulator.setup(64, settings=settings)

