"""Unit tests for plotting helpers."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from hrsim.core.negotiator import NegotiationResult
from hrsim.viz import (
    plot_membrane_potential,
    plot_phase_portrait,
    plot_negotiation,
    save_figure,
)


@pytest.fixture
def trace():
    t = np.linspace(0.0, 20.0, 200)
    return np.column_stack([np.sin(t), np.cos(t), 3.0 + 0.1 * t])


class TestPlots:
    """Smoke tests: figures build and save without a display."""

    def test_membrane_potential(self, trace):
        fig, ax = plot_membrane_potential(trace, dt=0.1, spike_times=[1.0, 2.0])

        line = ax.get_lines()[0]
        assert np.allclose(line.get_ydata(), trace[:, 0])
        assert ax.get_ylabel() == "x"
        plt.close(fig)

    def test_membrane_potential_millivolts(self, trace):
        fig, ax = plot_membrane_potential(trace[:, 0], dt=0.1, millivolts=True)

        assert np.allclose(ax.get_lines()[0].get_ydata(), trace[:, 0] * 1000.0)
        assert ax.get_ylabel() == "x (mV)"
        plt.close(fig)

    def test_existing_axes(self, trace):
        fig, ax = plt.subplots()
        returned_fig, returned_ax = plot_membrane_potential(trace, dt=0.1, ax=ax)

        assert returned_ax is ax
        assert returned_fig is fig
        plt.close(fig)

    def test_phase_portrait(self, trace):
        fig, ax = plot_phase_portrait(trace)
        assert np.allclose(ax.get_lines()[0].get_xdata(), trace[:, 0])
        plt.close(fig)

    def test_phase_portrait_requires_state_trace(self):
        with pytest.raises(ValueError):
            plot_phase_portrait(np.zeros(10))

    def test_negotiation(self, tmp_path):
        periods = [0.0001, 0.001, 0.002]
        results = [
            NegotiationResult(dt=0.02, sub_step_count=1),
            NegotiationResult(dt=0.05, sub_step_count=6),
            NegotiationResult(dt=0.05, sub_step_count=11),
        ]
        fig = plot_negotiation(periods, results)
        path = tmp_path / "negotiation.png"
        save_figure(fig, path)

        assert len(fig.axes) == 2
        assert path.exists()
        plt.close(fig)
