"""Service mapper: per-instance API request counters"""
from pydantic import BaseModel
from .base import BaseMapper
from .models import ServiceSnapshot
from .service_counters import record_service_counters, register_service_families


class ServiceMapper(BaseMapper):
    """Map per-service request counts onto counter families labeled {instance, service}.

    Upstream reports cumulative totals, so by default each call replaces the
    sample with the latest value. With the ``accumulate`` counter policy the
    reported values are added to the running samples instead. Lower values
    are taken as-is; no reset detection happens here.
    """

    parameter = "serviceMetrics"
    snapshot_model = ServiceSnapshot

    def __init__(self, registry=None, config=None):
        super().__init__(registry, config, "service", "API request counters per service and instance")

    def register_families(self) -> None:
        register_service_families(self.registry, include_total=True)

    def map_snapshot(self, snapshot: BaseModel) -> int:
        samples = 0
        accumulate = self.config.is_accumulating()

        for record in snapshot.services:
            for counters in record.instances:
                samples += record_service_counters(
                    self.registry,
                    instance=counters.instance,
                    service=record.service,
                    success=counters.success,
                    failure=counters.failure,
                    exceptions=counters.exceptions,
                    total=counters.total,
                    accumulate=accumulate,
                )

        return samples

    def count_records(self, snapshot: BaseModel) -> int:
        return len(snapshot.services)
