"""Host-facing flow node"""
from .flow_node import PrometheusMetricsFlowNode

__all__ = [
    'PrometheusMetricsFlowNode'
]
