"""System overview mapper: gateway instance resource gauges"""
from pydantic import BaseModel
from .base import BaseMapper
from .models import SystemOverviewSnapshot
from .service_counters import record_service_counters, register_service_families
from metrics.models import MetricType


INSTANCE_LABELS = ("instance",)

# (snapshot field, family name, help text)
RESOURCE_GAUGES = (
    ("cpu", "gateway_instance_cpu", "CPU usage of the API-Gateway instance in percent"),
    ("memory", "gateway_instance_memory", "Memory used by the API-Gateway instance"),
    ("disk_used", "gateway_instance_disk_used", "Disk space used on the API-Gateway instance in percent"),
    ("system_cpu", "gateway_system_cpu", "CPU usage of the host running the API-Gateway instance in percent"),
    ("system_memory_used", "gateway_system_memory_used", "Memory used on the host running the API-Gateway instance"),
    ("system_memory_total", "gateway_system_memory_total", "Total memory of the host running the API-Gateway instance"),
)


class SystemOverviewMapper(BaseMapper):
    """Map a fleet-level system overview onto instance gauges.

    Until the monitoring API reports service counters only in its service
    payload, the per-service counters embedded in each instance record are
    also written here, through the same function the service mapper uses.
    They follow the same counter policy as the service mapper.
    """

    parameter = "systemOverviewMetrics"
    snapshot_model = SystemOverviewSnapshot

    def __init__(self, registry=None, config=None):
        super().__init__(registry, config, "system_overview", "API-Gateway instance resource metrics")

    @property
    def legacy_counters_enabled(self) -> bool:
        return self.config.legacy_service_counters_enabled

    def register_families(self) -> None:
        for _, name, help_text in RESOURCE_GAUGES:
            self.registry.register_family(name, MetricType.GAUGE, help_text, INSTANCE_LABELS)
        if self.legacy_counters_enabled:
            register_service_families(self.registry, include_total=False)

    def map_snapshot(self, snapshot: BaseModel) -> int:
        samples = 0
        accumulate = self.config.is_accumulating()

        for record in snapshot.instances:
            labels = {"instance": record.instance}

            for field, name, _ in RESOURCE_GAUGES:
                value = getattr(record, field)
                # Absent fields are omitted; an explicit 0 is a real reading
                if value is None:
                    continue
                self.registry.set_sample(name, labels, value)
                samples += 1

            if not self.legacy_counters_enabled:
                continue

            # TODO: drop once the monitoring API stops embedding service counters in the system overview
            for entry in record.services:
                samples += record_service_counters(
                    self.registry,
                    instance=entry.instance or record.instance,
                    service=entry.service,
                    success=entry.success,
                    failure=entry.failure,
                    exceptions=entry.exceptions,
                    accumulate=accumulate,
                )

        return samples

    def count_records(self, snapshot: BaseModel) -> int:
        return len(snapshot.instances)
