"""Unit tests for the host adapters."""

import json
import logging

import pytest

from hrsim.core.state import ModelParameters, SimulationState, TimingState
from hrsim.host import (
    NeuronRegistry,
    create_neuron,
    apply_config,
    apply_config_json,
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
from hrsim.host.config import get_number


def snapshot(neuron):
    """Copy of everything a configuration document can touch."""
    return (
        neuron.state.copy(),
        ModelParameters(**vars(neuron.params)),
        TimingState(**vars(neuron.timing)),
    )


class TestGetNumber:
    """Tests for numeric value extraction."""

    def test_present(self):
        assert get_number({"e": 3}, "e") == 3.0

    def test_missing_uses_default(self):
        assert get_number({}, "e", 1.5) == 1.5
        assert get_number({}, "e") is None

    def test_non_numeric_ignored(self):
        assert get_number({"e": "3.0"}, "e", 1.5) == 1.5
        assert get_number({"e": None}, "e", 1.5) == 1.5
        assert get_number({"e": True}, "e", 1.5) == 1.5

    def test_non_finite_ignored(self):
        assert get_number({"e": float("nan")}, "e", 1.5) == 1.5
        assert get_number({"e": float("inf")}, "e", 1.5) == 1.5
        assert get_number({"e": -float("inf")}, "e") is None

    def test_huge_integer_ignored(self):
        """Integers beyond the float range count as missing instead of raising."""
        assert get_number({"e": 10 ** 400}, "e", 1.5) == 1.5


class TestApplyConfig:
    """Tests for configuration ingestion."""

    def test_parameters(self):
        neuron = create_neuron()
        apply_config(neuron, {"e": 3.0, "mu": 0.005, "s": 4.1, "vh": 0.8})

        assert neuron.params == ModelParameters(e=3.0, mu=0.005, s=4.1, vh=0.8)

    def test_timing_triggers_negotiation(self):
        neuron = create_neuron()
        result = apply_config(neuron, {"burst_duration": 1.0, "period_seconds": 0.002})

        assert (result.dt, result.sub_step_count) == (0.05, 11)
        assert neuron.timing.sub_step_count == 11

    def test_time_increment(self):
        neuron = create_neuron()
        apply_config(neuron, {"burst_duration": 0.0, "time_increment": 0.00025})

        assert neuron.timing.dt == 0.00025
        assert neuron.timing.sub_step_count == 4

    def test_negative_time_increment_clamped(self):
        neuron = create_neuron()
        apply_config(neuron, {"burst_duration": 0.0, "time_increment": -0.5})

        assert neuron.timing.dt == 0.05
        assert neuron.timing.dt > 0.0

    def test_unknown_keys_ignored(self):
        neuron = create_neuron()
        before = snapshot(neuron)
        apply_config(neuron, {"gain": 10.0, "name": "hr"})

        assert snapshot(neuron) == before

    def test_state_triple_applied(self):
        neuron = create_neuron()
        apply_config(neuron, {"x": -1.2, "y": -6.0, "z": 3.1})

        assert neuron.state == SimulationState(-1.2, -6.0, 3.1)

    def test_partial_triple_uses_current_state(self):
        neuron = create_neuron()
        apply_config(neuron, {"x": -1.2})

        assert neuron.state == SimulationState(-1.2, SimulationState().y, SimulationState().z)

    def test_repeated_push_does_not_reset_trajectory(self):
        config = {"x": -1.2, "y": -6.0, "z": 3.1, "e": 3.25}
        neuron = create_neuron()
        apply_config(neuron, config)
        neuron.run(10, period_seconds=0.001)
        moved = neuron.state.copy()

        apply_config(neuron, config)
        assert neuron.state == moved

    def test_idempotent(self):
        """Applying a document twice equals applying it once."""
        config = {
            "x": -1.1, "y": -5.5, "z": 3.0,
            "e": 3.1, "mu": 0.004, "s": 3.8, "vh": 1.0,
            "burst_duration": 0.5, "period_seconds": 0.0005,
        }
        neuron = create_neuron()
        apply_config(neuron, config)
        once = snapshot(neuron)

        apply_config(neuron, config)
        assert snapshot(neuron) == once

    def test_idempotent_without_state_keys(self):
        neuron = create_neuron()
        neuron.run(5)
        config = {"e": 3.0, "burst_duration": 0.0, "time_increment": 0.001}

        apply_config(neuron, config)
        once = snapshot(neuron)
        apply_config(neuron, config)
        assert snapshot(neuron) == once


class TestApplyConfigJson:
    """Tests for JSON configuration payloads."""

    def test_valid(self):
        neuron = create_neuron()
        result = apply_config_json(neuron, json.dumps({"e": 3.0, "period_seconds": 0.0001}))

        assert neuron.params.e == 3.0
        assert result.dt == 0.02

    def test_bytes(self):
        neuron = create_neuron()
        apply_config_json(neuron, b'{"mu": 0.004}')
        assert neuron.params.mu == 0.004

    def test_malformed_dropped(self, caplog):
        neuron = create_neuron()
        before = snapshot(neuron)

        with caplog.at_level(logging.WARNING, logger="hrsim.host.config"):
            result = apply_config_json(neuron, '{"e": 3.0,')

        assert result is None
        assert snapshot(neuron) == before
        assert "malformed" in caplog.text

    def test_non_object_dropped(self):
        neuron = create_neuron()
        assert apply_config_json(neuron, "[1, 2, 3]") is None
        assert neuron.params == ModelParameters()

    def test_nan_period_ignored(self):
        """A NaN period in the document keeps the period and the host still wins."""
        neuron = create_neuron()
        apply_config_json(neuron, '{"period_seconds": NaN, "e": Infinity}')

        assert neuron.timing.period_seconds == 0.001
        assert neuron.params.e == 3.25

        neuron.tick(0.002)
        assert neuron.timing.period_seconds == 0.002
        assert neuron.timing.sub_step_count == 11

    def test_huge_integer_ignored(self):
        neuron = create_neuron()
        before = snapshot(neuron)
        result = apply_config_json(neuron, '{"e": 1' + "0" * 400 + "}")

        assert result is not None
        assert snapshot(neuron) == before

    def test_empty_dropped(self):
        neuron = create_neuron()
        assert apply_config_json(neuron, "") is None


class TestRegistry:
    """Tests for NeuronRegistry."""

    def test_create_and_get(self):
        registry = NeuronRegistry()
        neuron = registry.create(7)

        assert registry.get(7) is neuron
        assert 7 in registry
        assert len(registry) == 1
        assert neuron.state == SimulationState()

    def test_duplicate_rejected(self):
        registry = NeuronRegistry()
        registry.create(1)
        with pytest.raises(ValueError):
            registry.create(1)

    def test_destroy(self):
        registry = NeuronRegistry()
        registry.create(1)
        registry.destroy(1)

        assert 1 not in registry
        with pytest.raises(KeyError):
            registry.get(1)

    def test_destroy_unknown_ignored(self):
        registry = NeuronRegistry()
        registry.destroy(42)
        assert len(registry) == 0

    def test_tick_all_keeps_instances_independent(self):
        registry = NeuronRegistry()
        a = registry.create(1)
        b = registry.create(2)
        a.set_input("i_syn", 2.0)

        registry.tick_all(0.001)

        assert a.current_tick == b.current_tick == 1
        assert a.state != b.state
        assert sorted(registry) == [1, 2]


class TestPorts:
    """Tests for port names and description documents."""

    def test_port_names(self):
        assert INPUTS == ["i_syn"]
        assert OUTPUTS == ["Membrane potential (V)", "Membrane potential (mV)"]
        assert VARIABLES == ["x", "y", "z"]

    def test_output_ports_readable(self):
        neuron = create_neuron()
        neuron.tick()
        assert neuron.get_output(OUTPUTS[0]) == neuron.state.x
        assert neuron.get_output(OUTPUTS[1]) == neuron.state.x * 1000.0

    def test_meta_defaults(self):
        meta = meta_document()
        defaults = dict(meta["default_vars"])

        assert meta["name"] == "Hindmarsh Rose"
        assert list(defaults) == ["x", "y", "z", "e", "mu", "s", "vh", "burst_duration"]
        assert defaults["e"] == 3.25
        assert defaults["x"] == SimulationState().x

    def test_documents_are_copies(self):
        inputs_document().append("bogus")
        assert inputs_document() == ["i_syn"]
        assert outputs_document() == OUTPUTS

    def test_behavior(self):
        behavior = behavior_document()
        assert behavior["supports_start_stop"] is True
        assert behavior["extendable_inputs"] == {"type": "none"}

    def test_ui_schema(self):
        schema = ui_schema_document()
        assert schema == {"outputs": OUTPUTS, "inputs": INPUTS, "variables": VARIABLES}

    def test_to_json(self):
        assert json.loads(to_json(ui_schema_document())) == ui_schema_document()
        assert json.loads(to_json(inputs_document())) == ["i_syn"]
