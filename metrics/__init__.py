"""Metric families, registries, merging and exposition"""
from .errors import ConflictError, InvalidLabelSetError, InvalidNameError, MissingParameterError, NotFoundError
from .models import MetricFamily, MetricType, Sample
from .outcome import FlowResult, Outcome
from .registry import MetricsRegistry
from .merge import merge_registries

__all__ = [
    'ConflictError',
    'InvalidLabelSetError',
    'InvalidNameError',
    'MissingParameterError',
    'NotFoundError',
    'MetricFamily',
    'MetricType',
    'Sample',
    'FlowResult',
    'Outcome',
    'MetricsRegistry',
    'merge_registries'
]
