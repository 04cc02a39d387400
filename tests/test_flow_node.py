"""Tests for the prometheus-metrics flow node"""
import json
from pathlib import Path

from app.flow_node import PrometheusMetricsFlowNode
from config import Config
from metrics.errors import ConflictError, MissingParameterError
from metrics.exporters.prometheus import parse_prometheus_text
from metrics.models import MetricType
from metrics.outcome import FlowResult, Outcome
from metrics.registry import MetricsRegistry


FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name):
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


def sample_registry(name, help_text):
    registry = MetricsRegistry(name=name)
    family = registry.register_family(name, MetricType.GAUGE, help_text)
    registry.set_sample(family, {}, 0)
    return registry


class TestFlowNode:
    """Test flow node definition and snapshot processing"""

    def setup_method(self):
        """Setup test fixtures"""
        self.node = PrometheusMetricsFlowNode(Config())

    def test_node_definition(self):
        """Test the node id and its methods"""
        assert self.node.node_id == "prometheus-metrics"
        assert self.node.methods == ("processSystemOverviewMetrics", "processServiceMetrics", "mergeRegistries")

    def test_flow_result_unpacks(self):
        """Test results unpack into a value and an outcome"""
        result = FlowResult.next("text")
        value, output = result

        assert value == "text"
        assert output is Outcome.NEXT
        assert result.ok

    def test_process_system_overview_missing(self):
        """Test the missing parameter error from the system overview method"""
        value, output = self.node.process_system_overview_metrics(system_overview_metrics=None)

        assert isinstance(value, MissingParameterError)
        assert str(value) == "Missing required parameter systemOverviewMetrics"
        assert output == "error"

    def test_process_service_missing(self):
        """Test the missing parameter error from the service method"""
        value, output = self.node.process_service_metrics(service_metrics=None)

        assert isinstance(value, MissingParameterError)
        assert str(value) == "Missing required parameter serviceMetrics"
        assert output == "error"

    def test_processing_uses_owned_registries(self):
        """Test each snapshot kind is written into its own registry"""
        value, output = self.node.process_system_overview_metrics(load_fixture("system_overview.json"))
        assert output == "next"
        assert value is self.node.system_overview_registry

        value, output = self.node.process_service_metrics(load_fixture("service_metrics.json"))
        assert output == "next"
        assert value is self.node.service_registry

    def test_merge_owned_registries(self):
        """Test legacy and service counters merge into one family set"""
        self.node.process_system_overview_metrics(load_fixture("system_overview.json"))
        self.node.process_service_metrics(load_fixture("service_metrics.json"))

        value, output = self.node.merge_registries()

        assert output == "next"
        names = [f.name for f in value.list_families()]
        assert names[0] == "gateway_instance_cpu"
        assert "api_requests_total" in names
        # instance-1/Greeting API is reported by both payloads; the service registry is merged last
        assert len(value.get_family("api_requests_success").values()) == 5
        assert value.get_sample("api_requests_success", {"instance": "instance-1", "service": "Greeting API"}) == 2078

    def test_merge_renders_parsable_text(self):
        """Test rendered merge output parses back to the merged samples"""
        self.node.process_service_metrics(load_fixture("service_metrics.json"))

        value, output = self.node.merge_registries(return_metrics=True)

        assert output == "next"
        parsed = parse_prometheus_text(value)
        assert ("api_requests_success", {"instance": "instance-1", "service": "Greeting API"}, 2078.0) in parsed

    def test_status(self):
        """Test invocation statistics"""
        self.node.process_service_metrics(None)
        self.node.process_service_metrics(load_fixture("service_metrics.json"))

        status = self.node.get_status()

        assert status["node"] == "prometheus-metrics"
        assert status["total_invocations"] == 2
        assert status["invocation_errors"] == 1
        assert status["counter_policy"] == "set"
        assert status["families"]["service"] == 4
        assert status["mappers"] == {
            "system_overview": "API-Gateway instance resource metrics",
            "service": "API request counters per service and instance",
        }


class TestFlowNodeMerge:
    """Test merging registries injected into the flow node"""

    def setup_method(self):
        """Setup test fixtures"""
        self.registry1 = sample_registry("registry1_metric", "A sample metric for registry 1")
        self.registry2 = sample_registry("registry2_metric", "A sample metric for registry 2")
        self.node = PrometheusMetricsFlowNode(Config(), registries=[self.registry1, self.registry2])

    def test_merge_two_registries(self):
        """Test injected registries are merged into one registry"""
        value, output = self.node.merge_registries()

        assert isinstance(value, MetricsRegistry)
        assert value.get_family("registry1_metric") is not None
        assert value.get_family("registry2_metric") is not None
        assert output == "next"

    def test_merge_two_registries_and_return_metrics(self):
        """Test the rendered merge matches the expected exposition text byte for byte"""
        expected = (FIXTURES / "expected_merged_metrics.txt").read_text(encoding="utf-8")

        value, output = self.node.merge_registries(return_metrics=True)

        assert value == expected
        assert output == "next"

    def test_explicit_registries_take_precedence(self):
        """Test an explicit registry list overrides the injected ones"""
        value, output = self.node.merge_registries([self.registry2])

        assert output == "next"
        assert [f.name for f in value.list_families()] == ["registry2_metric"]

    def test_merge_conflict_is_error_outcome(self):
        """Test conflicting family metadata surfaces as an error outcome"""
        conflicting = sample_registry("registry1_metric", "Different help")

        value, output = self.node.merge_registries([self.registry1, conflicting])

        assert isinstance(value, ConflictError)
        assert "registry1_metric" in str(value)
        assert output == "error"

    def test_merge_label_mismatch_is_error_outcome(self):
        """Test a shared family with different label names surfaces as an error outcome"""
        first = MetricsRegistry(name="first")
        first.set_sample(first.register_family("shared_metric", MetricType.GAUGE, "Shared"), {"instance": "i"}, 1)
        second = MetricsRegistry(name="second")
        second.set_sample(second.register_family("shared_metric", MetricType.GAUGE, "Shared"),
                          {"instance": "i", "service": "s"}, 2)

        value, output = self.node.merge_registries([first, second])

        assert isinstance(value, ConflictError)
        assert value.name == "shared_metric"
        assert output == "error"
