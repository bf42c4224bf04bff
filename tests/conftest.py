"""
Shared fixtures for the simulator tests
"""

import sys
import os

import numpy as np
import pytest

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src'))

from cdmasim.rf import UserInput  # noqa: E402


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def user_a():
    return UserInput(seed1=1, seed2=0b1010101010)


@pytest.fixture
def user_b():
    return UserInput(seed1=2, seed2=0b0101010101)
