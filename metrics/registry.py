"""Metric family registry holding labeled samples for one scrape snapshot"""
import re
import threading
from typing import Dict, List, Optional, Sequence, Union
from .models import MetricFamily, MetricType, Sample, label_key
from .errors import ConflictError, InvalidLabelSetError, InvalidNameError, NotFoundError
from logging_config import get_logger


logger = get_logger(__name__)

FamilyRef = Union[MetricFamily, str]

METRIC_NAME = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")
LABEL_NAME = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class MetricsRegistry:
    """Addressable collection of metric families keyed by name.

    Families and their samples keep insertion order so rendering the same
    state twice yields identical text. All writes and ``collect`` hold the
    registry lock; a registry may be shared by repeated mapper calls.
    """

    def __init__(self, name: str = "default"):
        self.name = name
        self._families: Dict[str, MetricFamily] = {}
        self._lock = threading.RLock()

    def register_family(self, name: str, metric_type: MetricType, help_text: str,
                        label_names: Optional[Sequence[str]] = None) -> MetricFamily:
        """Create a family, or return the existing one if its metadata matches"""
        requested_labels = tuple(label_names) if label_names is not None else None
        with self._lock:
            existing = self._families.get(name)
            if existing is not None:
                if not existing.same_metadata(metric_type, help_text):
                    raise ConflictError(
                        name,
                        existing=f"{existing.metric_type.value} '{existing.help_text}'",
                        requested=f"{metric_type.value} '{help_text}'",
                    )
                if requested_labels is not None:
                    if existing.label_names is None:
                        self._check_label_names(name, requested_labels)
                        existing.label_names = requested_labels
                    elif set(existing.label_names) != set(requested_labels):
                        raise ConflictError(
                            name,
                            existing=f"labels {list(existing.label_names)}",
                            requested=f"labels {list(requested_labels)}",
                        )
                return existing

            if not METRIC_NAME.match(name):
                raise InvalidNameError(f"Invalid metric name: {name!r}")
            if requested_labels is not None:
                self._check_label_names(name, requested_labels)

            family = MetricFamily(
                name=name,
                metric_type=metric_type,
                help_text=help_text,
                label_names=requested_labels,
            )
            self._families[name] = family
            logger.debug("Registered metric family", registry=self.name, family=name,
                         metric_type=metric_type.value, event_type="family_registered")
            return family

    def set_sample(self, family: FamilyRef, labels: Dict[str, str], value: float) -> None:
        """Insert or fully replace the value for an exact label-set"""
        with self._lock:
            target = self._resolve(family)
            self._check_labels(target, labels)
            key = label_key(labels)
            existing = target.samples.get(key)
            if existing is None:
                target.samples[key] = Sample(dict(labels), float(value))
            else:
                existing.value = float(value)

    def inc_sample(self, family: FamilyRef, labels: Dict[str, str], amount: float) -> float:
        """Add to the value for a label-set, starting from zero"""
        with self._lock:
            target = self._resolve(family)
            self._check_labels(target, labels)
            key = label_key(labels)
            existing = target.samples.get(key)
            if existing is None:
                existing = target.samples[key] = Sample(dict(labels), 0.0)
            existing.value += float(amount)
            return existing.value

    def get_sample(self, name: str, labels: Dict[str, str]) -> float:
        """Get the value stored for a label-set"""
        with self._lock:
            sample = self.get_family(name).get(labels)
            if sample is None:
                raise NotFoundError(f"No sample {labels} in metric family {name}")
            return sample.value

    def get_family(self, name: str) -> MetricFamily:
        family = self.find_family(name)
        if family is None:
            raise NotFoundError(f"Metric family {name} is not registered")
        return family

    def find_family(self, name: str) -> Optional[MetricFamily]:
        return self._families.get(name)

    def list_families(self) -> List[MetricFamily]:
        """List families in registration order"""
        with self._lock:
            return list(self._families.values())

    def collect(self) -> List[MetricFamily]:
        """Point-in-time copy of every family, safe to read without the lock"""
        with self._lock:
            return [family.copy() for family in self._families.values()]

    def clear(self) -> None:
        with self._lock:
            self._families.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._families

    def __len__(self) -> int:
        return len(self._families)

    def _resolve(self, family: FamilyRef) -> MetricFamily:
        if isinstance(family, MetricFamily):
            registered = self._families.get(family.name)
            if registered is not family:
                raise NotFoundError(f"Metric family {family.name} does not belong to registry {self.name}")
            return family
        return self.get_family(family)

    @staticmethod
    def _check_label_names(name: str, label_names: Sequence[str]) -> None:
        for label in label_names:
            if not isinstance(label, str) or not LABEL_NAME.match(label):
                raise InvalidNameError(f"Invalid label name {label!r} for metric family {name}")
        if len(set(label_names)) != len(label_names):
            raise InvalidNameError(f"Duplicate label names {list(label_names)} for metric family {name}")

    @classmethod
    def _check_labels(cls, family: MetricFamily, labels: Dict[str, str]) -> None:
        for key, value in labels.items():
            if not isinstance(value, str):
                raise InvalidLabelSetError(
                    f"Label {key} of metric family {family.name} must be a string, got {type(value).__name__}"
                )
        if family.label_names is None:
            cls._check_label_names(family.name, tuple(labels.keys()))
            family.label_names = tuple(labels.keys())
            return
        if set(labels.keys()) != set(family.label_names):
            raise InvalidLabelSetError(
                f"Labels {sorted(labels)} do not match {list(family.label_names)} for metric family {family.name}"
            )
