"""Metric family data models"""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple
from enum import Enum


LabelKey = FrozenSet[Tuple[str, str]]


class MetricType(Enum):
    """Prometheus metric types"""
    COUNTER = "counter"
    GAUGE = "gauge"


def label_key(labels: Dict[str, str]) -> LabelKey:
    """Order-independent identity of a label-set"""
    return frozenset(labels.items())


@dataclass
class Sample:
    """Single labeled value inside a metric family"""
    labels: Dict[str, str]
    value: float

    def __post_init__(self):
        # Ensure labels is never None
        if self.labels is None:
            self.labels = {}


@dataclass
class MetricFamily:
    """Named metric with a type, help text and one sample per label-set"""
    name: str
    metric_type: MetricType
    help_text: str
    label_names: Optional[Tuple[str, ...]] = None
    samples: Dict[LabelKey, Sample] = field(default_factory=dict)

    def same_metadata(self, metric_type: MetricType, help_text: str) -> bool:
        return self.metric_type == metric_type and self.help_text == help_text

    def get(self, labels: Dict[str, str]) -> Optional[Sample]:
        return self.samples.get(label_key(labels))

    def values(self) -> List[Sample]:
        """Samples in insertion order"""
        return list(self.samples.values())

    def copy(self) -> "MetricFamily":
        return MetricFamily(
            name=self.name,
            metric_type=self.metric_type,
            help_text=self.help_text,
            label_names=self.label_names,
            samples={key: Sample(dict(s.labels), s.value) for key, s in self.samples.items()},
        )
