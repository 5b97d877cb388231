"""
Port names and static description documents for host UIs.

These documents carry no runtime behavior; they tell a host which inputs,
outputs and variables a neuron exposes and what the defaults are.
"""

from __future__ import annotations
from dataclasses import asdict
import json

from hrsim.core.driver import INPUT_I_SYN, OUTPUT_MEMBRANE_MV, OUTPUT_MEMBRANE_V
from hrsim.core.state import ModelParameters, SimulationState, TimingState

PLUGIN_NAME = "Hindmarsh Rose"

INPUTS = [INPUT_I_SYN]
OUTPUTS = [OUTPUT_MEMBRANE_V, OUTPUT_MEMBRANE_MV]
VARIABLES = ["x", "y", "z"]


def meta_document() -> dict:
    """Name and default configuration values, in configuration-key order."""
    state = asdict(SimulationState())
    params = asdict(ModelParameters())
    timing = TimingState()
    default_vars = [[name, value] for name, value in state.items()]
    default_vars += [[name, value] for name, value in params.items()]
    default_vars.append(["burst_duration", timing.burst_duration])
    return {"name": PLUGIN_NAME, "default_vars": default_vars}


def inputs_document() -> list[str]:
    return list(INPUTS)


def outputs_document() -> list[str]:
    return list(OUTPUTS)


def behavior_document() -> dict:
    """Lifecycle capabilities advertised to the host."""
    return {
        "supports_start_stop": True,
        "supports_restart": True,
        "extendable_inputs": {"type": "none"},
        "loads_started": True,
    }


def ui_schema_document() -> dict:
    return {
        "outputs": outputs_document(),
        "inputs": inputs_document(),
        "variables": list(VARIABLES),
    }


def to_json(document: dict | list) -> str:
    """Serialize a description document."""
    return json.dumps(document)
