"""
Pytest configuration and shared fixtures.
"""

import pytest


@pytest.fixture
def default_params():
    """Model parameters in the default bursting regime."""
    from hrsim.core import ModelParameters
    return ModelParameters()


@pytest.fixture
def default_state():
    """The documented default (x, y, z)."""
    from hrsim.core import SimulationState
    return SimulationState().as_tuple()


@pytest.fixture
def neuron():
    """A freshly created neuron with default configuration."""
    from hrsim.core import HindmarshRoseNeuron
    return HindmarshRoseNeuron()


@pytest.fixture
def negotiator():
    """Negotiator over the default 12-entry table."""
    from hrsim.core import StepSizeNegotiator
    return StepSizeNegotiator()
