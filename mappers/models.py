"""Monitoring snapshot models as delivered by the API-Gateway monitoring API"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt
from pydantic.alias_generators import to_camel


class SnapshotModel(BaseModel):
    """Base for upstream records: camelCase keys, unknown fields ignored"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True)


class LegacyServiceCounters(SnapshotModel):
    """Per-service request counters embedded in a system overview instance record.

    The upstream monitoring API places these here instead of in the service
    payload. ``instance`` overrides the enclosing record's instance name.
    """
    service: str = Field(min_length=1)
    instance: Optional[str] = None
    success: NonNegativeInt = 0
    failure: NonNegativeInt = 0
    exceptions: NonNegativeInt = 0


class InstanceOverview(SnapshotModel):
    """Resource utilization of one gateway instance"""
    instance: str = Field(min_length=1)
    cpu: Optional[float] = None
    memory: Optional[float] = None
    disk_used: Optional[float] = None
    system_cpu: Optional[float] = None
    system_memory_used: Optional[float] = None
    system_memory_total: Optional[float] = None
    services: List[LegacyServiceCounters] = Field(default_factory=list)


class SystemOverviewSnapshot(SnapshotModel):
    """Fleet-level monitoring snapshot for one polling cycle"""
    instances: List[InstanceOverview] = Field(default_factory=list)


class ServiceInstanceCounters(SnapshotModel):
    """Cumulative request totals of a service on one gateway instance"""
    instance: str = Field(min_length=1)
    total: NonNegativeInt
    success: NonNegativeInt
    failure: NonNegativeInt
    exceptions: NonNegativeInt


class ServiceRecord(SnapshotModel):
    """One service and its per-instance breakdown"""
    service: str = Field(min_length=1)
    instances: List[ServiceInstanceCounters] = Field(default_factory=list)


class ServiceSnapshot(SnapshotModel):
    """Service monitoring snapshot for one polling cycle"""
    services: List[ServiceRecord] = Field(default_factory=list)
