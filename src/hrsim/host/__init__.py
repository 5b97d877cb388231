"""
Host adapters: the thin layer between a real-time host and the neuron core.

- NeuronRegistry / create_neuron: instance lifecycle
- apply_config / apply_config_json: key → value configuration documents
- INPUTS / OUTPUTS and *_document(): port names and UI metadata
"""

from hrsim.host.lifecycle import NeuronRegistry, create_neuron
from hrsim.host.config import apply_config, apply_config_json, RECOGNIZED_KEYS
from hrsim.host.ports import (
    INPUTS,
    OUTPUTS,
    VARIABLES,
    meta_document,
    inputs_document,
    outputs_document,
    behavior_document,
    ui_schema_document,
    to_json,
)

__all__ = [
    "NeuronRegistry",
    "create_neuron",
    "apply_config",
    "apply_config_json",
    "RECOGNIZED_KEYS",
    "INPUTS",
    "OUTPUTS",
    "VARIABLES",
    "meta_document",
    "inputs_document",
    "outputs_document",
    "behavior_document",
    "ui_schema_document",
    "to_json",
]
