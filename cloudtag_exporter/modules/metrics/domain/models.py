from dataclasses import dataclass, field
from typing import Dict


@dataclass
class MetricRecord:
    """One info sample. The value is always 0; the metric exists to carry labels."""

    name: str
    labels: Dict[str, str] = field(default_factory=dict)
    value: float = 0.0
