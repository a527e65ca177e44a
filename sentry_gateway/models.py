"""Modelos do payload de webhook do Alertmanager."""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Alert(BaseModel):
    """Um alerta firing/resolved dentro do webhook."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)
    startsAt: Optional[datetime] = None
    endsAt: Optional[datetime] = None
    generatorURL: str = ""
    fingerprint: str = ""

    @field_validator("labels", "annotations", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return {} if v is None else v

    def label(self, name: str) -> str:
        return self.labels.get(name, "")

    def annotation(self, name: str) -> str:
        return self.annotations.get(name, "")

    @property
    def alertname(self) -> str:
        return self.label("alertname")


class WebhookMessage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    version: str = ""
    groupKey: str = ""
    truncatedAlerts: int = 0
    status: str = ""
    receiver: str = ""
    groupLabels: Dict[str, str] = Field(default_factory=dict)
    commonLabels: Dict[str, str] = Field(default_factory=dict)
    commonAnnotations: Dict[str, str] = Field(default_factory=dict)
    externalURL: str = ""
    alerts: List[Alert] = Field(default_factory=list)

    @field_validator("groupLabels", "commonLabels", "commonAnnotations", "alerts", mode="before")
    @classmethod
    def null_as_empty(cls, v, info):
        if v is None:
            return [] if info.field_name == "alerts" else {}
        return v
