"""Metric exporters"""
from .prometheus import PrometheusExporter, parse_prometheus_text

__all__ = [
    'PrometheusExporter',
    'parse_prometheus_text'
]
