"""Base mapper class translating monitoring snapshots into registry samples"""
import time
from abc import ABC, abstractmethod
from typing import Any, Optional, Type
from pydantic import BaseModel, ValidationError
from config import Config
from metrics.errors import ConflictError, InvalidSnapshotError, MissingParameterError
from metrics.outcome import FlowResult
from metrics.registry import MetricsRegistry
from logging_config import get_logger, log_error, log_mapping_completed


logger = get_logger(__name__)


class BaseMapper(ABC):
    """Base class for all snapshot mappers.

    A mapper writes into a registry owned by its caller; passing the same
    registry to repeated calls keeps a long-lived scrape target. ``process``
    never raises for expected failures: missing or malformed input and
    family conflicts come back as an ``error`` outcome.
    """

    #: Parameter name reported when the snapshot is missing
    parameter: str = ""
    snapshot_model: Type[BaseModel]

    def __init__(self, registry: Optional[MetricsRegistry] = None, config: Optional[Config] = None,
                 name: str = "", help_text: str = ""):
        self.config = config or Config()
        self.registry = registry if registry is not None else MetricsRegistry(name=name or "default")
        self._name = name
        self._help_text = help_text
        self.register_families()

    @property
    def name(self) -> str:
        """Mapper name for identification"""
        return self._name

    @property
    def help_text(self) -> str:
        return self._help_text or f"{self.name} snapshot mapper"

    @abstractmethod
    def register_families(self) -> None:
        """Declare the families this mapper writes"""
        pass

    @abstractmethod
    def map_snapshot(self, snapshot: BaseModel) -> int:
        """Write samples for a validated snapshot and return how many were set"""
        pass

    def process(self, snapshot: Any) -> FlowResult:
        """Validate a snapshot, map it into the registry and return the outcome"""
        if not snapshot:
            error = MissingParameterError(self.parameter)
            logger.warning("Missing snapshot", mapper=self.name, parameter=self.parameter,
                           event_type="missing_parameter")
            return FlowResult.error(error)

        start = time.time()
        try:
            model = self.validate(snapshot)
            samples = self.map_snapshot(model)
        except (InvalidSnapshotError, ConflictError) as e:
            log_error(logger, e, {"mapper": self.name, "registry": self.registry.name})
            return FlowResult.error(e)

        log_mapping_completed(logger, self.name, self.count_records(model), samples, time.time() - start)
        return FlowResult.next(self.registry)

    def validate(self, snapshot: Any) -> BaseModel:
        """Convert raw snapshot data into the mapper's snapshot model"""
        if isinstance(snapshot, self.snapshot_model):
            return snapshot
        try:
            return self.snapshot_model.model_validate(snapshot)
        except ValidationError as e:
            raise InvalidSnapshotError(self.parameter, f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}") from e

    def count_records(self, snapshot: BaseModel) -> int:
        return 0
