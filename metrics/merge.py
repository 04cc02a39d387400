"""Merging of independently built metric registries"""
from typing import Iterable, Optional
from .registry import MetricsRegistry
from logging_config import get_logger


logger = get_logger(__name__)


def merge_registries(registries: Optional[Iterable[MetricsRegistry]], name: str = "merged") -> MetricsRegistry:
    """Combine registries into a fresh one.

    Sources are read in order. A family seen more than once must carry the
    same type and help text, otherwise ``ConflictError`` is raised. Samples
    are copied into the target; a later source replaces a sample only when
    it has exactly the same label-set.
    """
    target = MetricsRegistry(name=name)
    sources = 0

    for source in registries or ():
        sources += 1
        for family in source.collect():
            merged = target.register_family(family.name, family.metric_type, family.help_text, family.label_names)
            for sample in family.values():
                target.set_sample(merged, sample.labels, sample.value)

    logger.debug("Merged metric registries", sources=sources, families=len(target), event_type="registries_merged")
    return target
