"""Service request counter families shared by both snapshot mappers"""
from typing import Dict, Optional
from metrics.models import MetricType
from metrics.registry import MetricsRegistry


SERVICE_LABELS = ("instance", "service")

API_REQUESTS_TOTAL = ("api_requests_total", "Total number of API requests handled per instance and service")
API_REQUESTS_SUCCESS = ("api_requests_success", "Number of successful API requests per instance and service")
API_REQUESTS_FAILURES = ("api_requests_failures", "Number of failed API requests per instance and service")
API_REQUESTS_EXCEPTIONS = ("api_requests_exceptions", "Number of API requests ending in an exception per instance and service")

OUTCOME_FAMILIES = (API_REQUESTS_SUCCESS, API_REQUESTS_FAILURES, API_REQUESTS_EXCEPTIONS)


def register_service_families(registry: MetricsRegistry, include_total: bool) -> None:
    """Declare the request counter families so they render even before data arrives"""
    families = ((API_REQUESTS_TOTAL,) if include_total else ()) + OUTCOME_FAMILIES
    for name, help_text in families:
        registry.register_family(name, MetricType.COUNTER, help_text, SERVICE_LABELS)


def record_service_counters(registry: MetricsRegistry, instance: str, service: str,
                            success: int, failure: int, exceptions: int,
                            total: Optional[int] = None, accumulate: bool = False) -> int:
    """Write one (instance, service) observation into the request counter families.

    Both the service mapper and the legacy system overview path go through
    here so their label-sets cannot drift apart. Returns the number of
    samples written.
    """
    labels: Dict[str, str] = {"instance": instance, "service": service}
    values = [(API_REQUESTS_SUCCESS, success), (API_REQUESTS_FAILURES, failure), (API_REQUESTS_EXCEPTIONS, exceptions)]
    if total is not None:
        values.insert(0, (API_REQUESTS_TOTAL, total))

    for (name, help_text), value in values:
        family = registry.register_family(name, MetricType.COUNTER, help_text, SERVICE_LABELS)
        if accumulate:
            registry.inc_sample(family, labels, value)
        else:
            registry.set_sample(family, labels, value)
    return len(values)
