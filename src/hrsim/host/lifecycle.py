"""
Instance lifecycle for hosts that manage many neurons by identifier.

Each neuron is an independent HindmarshRoseNeuron; the registry only owns
them. Nothing is shared between instances.
"""

from __future__ import annotations
import logging
from typing import Iterator

from hrsim.core.driver import HindmarshRoseNeuron

logger = logging.getLogger(__name__)


class NeuronRegistry:
    """Creates, looks up and destroys neurons keyed by an opaque identifier."""

    def __init__(self):
        self._instances: dict[int, HindmarshRoseNeuron] = {}

    def create(self, instance_id: int) -> HindmarshRoseNeuron:
        """
        Create a neuron with default state and parameters.

        Raises:
            ValueError: if instance_id is already live
        """
        if instance_id in self._instances:
            raise ValueError(f"Instance {instance_id} already exists")
        neuron = create_neuron(instance_id)
        self._instances[instance_id] = neuron
        return neuron

    def destroy(self, instance_id: int) -> None:
        """Release a neuron. Unknown ids are ignored."""
        if self._instances.pop(instance_id, None) is not None:
            logger.debug("Destroyed neuron %s", instance_id)

    def get(self, instance_id: int) -> HindmarshRoseNeuron:
        """
        Look up a live neuron.

        Raises:
            KeyError: if instance_id is not live
        """
        return self._instances[instance_id]

    def tick_all(self, period_seconds: float | None = None) -> None:
        """Advance every live neuron by one tick."""
        for neuron in self._instances.values():
            neuron.tick(period_seconds)

    def __contains__(self, instance_id: object) -> bool:
        return instance_id in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[int]:
        return iter(self._instances)


def create_neuron(instance_id: int = 0) -> HindmarshRoseNeuron:
    """
    Create a standalone neuron.

    Args:
        instance_id: Opaque identifier, used only for logging
    """
    logger.debug("Created neuron %s", instance_id)
    return HindmarshRoseNeuron()
