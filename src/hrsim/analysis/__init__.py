"""
Analysis layer: offline measurements on recorded traces.

IMPORTANT: This is NOT used on the tick path. One-way derivation only.

- detect_spikes / group_bursts: spike and burst detection
- burst_statistics / measure_burst_period: burst cycle summary, the input
  for calibrating a StepSizeTable
"""

from hrsim.analysis.bursts import (
    Burst,
    BurstStatistics,
    detect_spikes,
    group_bursts,
    burst_statistics,
    measure_burst_period,
)

__all__ = [
    "Burst",
    "BurstStatistics",
    "detect_spikes",
    "group_bursts",
    "burst_statistics",
    "measure_burst_period",
]
