"""
Configuration ingestion from a host key → value document.

Recognized keys:
- x, y, z: initial state, applied as a group and only when the triple
  differs from the last one applied (a repeated push must not reset a
  running trajectory)
- e, mu, s, vh: model parameters
- burst_duration, period_seconds: timing (period is advisory)
- time_increment: direct dt override, clamped to >= 0

Unknown keys are ignored. Missing, non-numeric or non-finite values keep the
current setting. Every ingestion re-runs the step-size negotiator.
"""

from __future__ import annotations
import json
import logging
import math
import numbers
from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hrsim.core.driver import HindmarshRoseNeuron
    from hrsim.core.negotiator import NegotiationResult

logger = logging.getLogger(__name__)

STATE_KEYS = ("x", "y", "z")
PARAMETER_KEYS = ("e", "mu", "s", "vh")
TIMING_KEYS = ("burst_duration", "period_seconds", "time_increment")
RECOGNIZED_KEYS = STATE_KEYS + PARAMETER_KEYS + TIMING_KEYS


def get_number(config: Mapping[str, object], key: str, default: float | None = None) -> float | None:
    """
    Read a numeric value from a config document.

    Booleans, non-numeric values and values that are not finite as a float
    (NaN, ±Infinity, integers beyond the float range) count as missing.
    """
    value = config.get(key)
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return default
    try:
        number = float(value)
    except OverflowError:
        return default
    if not math.isfinite(number):
        return default
    return number


def apply_config(
    neuron: "HindmarshRoseNeuron",
    config: Mapping[str, object],
) -> "NegotiationResult":
    """
    Apply a configuration document to a neuron.

    Args:
        neuron: Target neuron
        config: Key → value mapping from the host

    Returns:
        The negotiation result for the new timing
    """
    state = neuron.state
    neuron.configure_state(
        get_number(config, "x", state.x),
        get_number(config, "y", state.y),
        get_number(config, "z", state.z),
    )

    return neuron.reconfigure(
        **{key: get_number(config, key) for key in PARAMETER_KEYS + TIMING_KEYS}
    )


def apply_config_json(
    neuron: "HindmarshRoseNeuron",
    payload: str | bytes,
) -> "NegotiationResult | None":
    """
    Decode a JSON object and apply it with apply_config.

    Undecodable payloads and non-object documents leave the neuron untouched.

    Returns:
        The negotiation result, or None if the payload was dropped
    """
    if not payload:
        return None
    try:
        document = json.loads(payload)
    except ValueError as exc:
        logger.warning("Dropping malformed config payload: %s", exc)
        return None

    if not isinstance(document, Mapping):
        logger.warning("Dropping config payload: expected an object, got %s", type(document).__name__)
        return None

    return apply_config(neuron, document)
