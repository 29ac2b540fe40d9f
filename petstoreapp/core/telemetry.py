"""
Telemetry client
Per-session handle for events, page views, exceptions and metrics

Records go to the "petstoreapp.telemetry" logger and to a small in-memory
buffer, so they can be shipped by whatever log pipeline the host uses.
"""
import logging
import time
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger("petstoreapp.telemetry")

MAX_BUFFERED_RECORDS = 200


class TelemetryRecord(BaseModel):
    """One telemetry item"""
    kind: str  # event | page_view | exception | metric
    name: str
    properties: Dict[str, str] = Field(default_factory=dict)
    value: Optional[float] = None
    timestamp: float = Field(default_factory=time.time)


class TelemetryClient:
    """
    Telemetry handle kept on the session user.

    Usage:
        client = TelemetryClient({"session_Id": "abc"})
        client.track_event("PetStoreApp user Guest logged in")
        client.track_metric("Product count", 3)
    """

    def __init__(self, context_properties: Optional[Dict[str, str]] = None):
        self.context_properties: Dict[str, str] = dict(context_properties or {})
        self._records: Deque[TelemetryRecord] = deque(maxlen=MAX_BUFFERED_RECORDS)

    def _record(self, kind: str, name: str, properties: Optional[Dict[str, Any]] = None,
                value: Optional[float] = None) -> TelemetryRecord:
        merged = dict(self.context_properties)
        if properties:
            merged.update({k: str(v) for k, v in properties.items()})
        record = TelemetryRecord(kind=kind, name=name, properties=merged, value=value)
        self._records.append(record)
        return record

    def track_event(self, name: str, properties: Optional[Dict[str, Any]] = None) -> None:
        record = self._record("event", name, properties)
        logger.info(f"event: {name} {record.properties}")

    def track_page_view(self, name: str, url: str) -> None:
        self._record("page_view", name, {"url": url})
        logger.info(f"page view: {name} {url}")

    def track_exception(self, exc: BaseException) -> None:
        self._record("exception", type(exc).__name__, {"message": str(exc)})
        logger.warning(f"exception: {type(exc).__name__}: {exc}")

    def track_metric(self, name: str, value: float) -> None:
        self._record("metric", name, value=value)
        logger.info(f"metric: {name}={value}")

    @property
    def records(self) -> List[TelemetryRecord]:
        return list(self._records)

    def records_of(self, kind: str) -> List[TelemetryRecord]:
        return [r for r in self._records if r.kind == kind]
