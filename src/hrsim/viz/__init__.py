"""
Visualization utilities.

- Membrane potential traces
- Phase portraits
- Negotiated timing across host periods
"""

from hrsim.viz.traces import (
    plot_membrane_potential,
    plot_phase_portrait,
    plot_negotiation,
    save_figure,
)

__all__ = [
    "plot_membrane_potential",
    "plot_phase_portrait",
    "plot_negotiation",
    "save_figure",
]
