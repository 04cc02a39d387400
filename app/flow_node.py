"""Prometheus metrics flow node exposed to the host runtime"""
import time
from typing import Any, Dict, List, Optional
from config import Config
from mappers.service import ServiceMapper
from mappers.system_overview import SystemOverviewMapper
from metrics.errors import ConflictError
from metrics.exporters.prometheus import PrometheusExporter
from metrics.merge import merge_registries
from metrics.outcome import FlowResult
from metrics.registry import MetricsRegistry
from logging_config import get_logger, log_error


logger = get_logger(__name__)


class PrometheusMetricsFlowNode:
    """Flow node turning gateway monitoring snapshots into Prometheus metrics.

    The node owns one registry per snapshot kind; both live as long as the
    node does. Registries injected at construction (for example from other
    sources) replace the node's own ones as the default input of
    ``merge_registries``. Calls against one node are expected to be
    serialized by the host; the registries lock their own writes.
    """

    node_id = "prometheus-metrics"
    methods = ("processSystemOverviewMetrics", "processServiceMetrics", "mergeRegistries")

    def __init__(self, config: Optional[Config] = None, registries: Optional[List[MetricsRegistry]] = None):
        self.config = config or Config()
        self.system_overview_registry = MetricsRegistry(name="system_overview")
        self.service_registry = MetricsRegistry(name="service")
        self.system_overview_mapper = SystemOverviewMapper(self.system_overview_registry, self.config)
        self.service_mapper = ServiceMapper(self.service_registry, self.config)
        self.injected_registries = list(registries) if registries else []
        self.exporter = PrometheusExporter()

        # Invocation state
        self.last_invocation_time = 0
        self.invocation_count = 0
        self.invocation_errors = 0

    @property
    def registries(self) -> List[MetricsRegistry]:
        """Registries merged when no explicit list is given"""
        if self.injected_registries:
            return list(self.injected_registries)
        return [self.system_overview_registry, self.service_registry]

    def process_system_overview_metrics(self, system_overview_metrics: Any = None) -> FlowResult:
        """Map a system overview snapshot into the node's system overview registry"""
        return self._track(self.system_overview_mapper.process(system_overview_metrics))

    def process_service_metrics(self, service_metrics: Any = None) -> FlowResult:
        """Map a service snapshot into the node's service registry"""
        return self._track(self.service_mapper.process(service_metrics))

    def merge_registries(self, registries: Optional[List[MetricsRegistry]] = None,
                         return_metrics: bool = False) -> FlowResult:
        """Merge registries into one, optionally returning the rendered exposition text"""
        sources = self.registries if registries is None else registries
        try:
            merged = merge_registries(sources)
        except ConflictError as e:
            log_error(logger, e, {"node": self.node_id, "method": "mergeRegistries"})
            return self._track(FlowResult.error(e))

        if return_metrics:
            return self._track(FlowResult.next(self.exporter.export_registry(merged)))
        return self._track(FlowResult.next(merged))

    def get_status(self) -> Dict[str, Any]:
        """Invocation statistics and registry sizes"""
        age = time.time() - self.last_invocation_time if self.last_invocation_time > 0 else None
        return {
            "node": self.node_id,
            "service_name": self.config.service_name,
            "service_version": self.config.service_version,
            "last_invocation_seconds_ago": round(age, 1) if age is not None else None,
            "total_invocations": self.invocation_count,
            "invocation_errors": self.invocation_errors,
            "counter_policy": self.config.service_counter_policy.value,
            "families": {registry.name: len(registry) for registry in self.registries},
            "mappers": {
                mapper.name: mapper.help_text
                for mapper in (self.system_overview_mapper, self.service_mapper)
            },
        }

    def _track(self, result: FlowResult) -> FlowResult:
        self.last_invocation_time = time.time()
        self.invocation_count += 1
        if not result.ok:
            self.invocation_errors += 1
        logger.debug("Flow node invoked", node=self.node_id, output=result.output.value,
                     event_type="flow_node_invocation")
        return result
