"""Mappers from gateway monitoring snapshots to metric registries"""
from .service import ServiceMapper
from .system_overview import SystemOverviewMapper

__all__ = [
    'ServiceMapper',
    'SystemOverviewMapper'
]
