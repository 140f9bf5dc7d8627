from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from faultbridge.exceptions import (
    AgentTransportError,
    FaultBridgeError,
    MissingParameterError,
    PayloadBuildError,
    ResultDecodeError,
)


class Intent(str, Enum):
    """Whether an experiment injects a fault or recovers from one."""

    INJECT = "inject"
    RECOVER = "recover"

    @classmethod
    def from_destroy(cls, destroy: bool) -> "Intent":
        return cls.RECOVER if destroy else cls.INJECT


class Outcome(str, Enum):
    """
    Canonical dispatch outcomes.

    DELIVERED means the agent answered 200 with a decodable body. Whether the
    fault itself took effect is carried by the agent's own response, which is
    not reinterpreted here.
    """

    DELIVERED = "delivered"
    MISSING_PARAMETER = "missing_parameter"
    PAYLOAD_BUILD_FAILED = "payload_build_failed"
    TRANSPORT_FAILED = "transport_failed"
    RESULT_DECODE_FAILED = "result_decode_failed"


@dataclass(frozen=True)
class ExperimentDescription:
    """One fault experiment as handed over by the orchestration layer.

    flags holds every user-supplied and default parameter, including the
    connection flags (host, port) and the selector (func).
    """

    action: str
    flags: Mapping[str, str] = field(default_factory=dict, hash=False)
    uid: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))


@dataclass(frozen=True)
class InjectionRequest:
    """Wire payload sent to the agent."""

    action: str
    flags: Dict[str, str] = field(default_factory=dict)
    target: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"action": self.action}
        if self.target is not None:
            body["target"] = self.target
        body["flags"] = dict(self.flags)
        return body


class AgentResponse(BaseModel):
    """Result envelope returned by the in-process agent."""

    model_config = ConfigDict(extra="allow")

    code: int
    success: bool
    err: str = ""
    result: Optional[Any] = None


class InjectionResult(BaseModel):
    """Uniform outcome of a single dispatch."""

    model_config = ConfigDict(extra="forbid")

    outcome: Outcome
    response: Optional[Any] = None
    message: str = ""
    details: Dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.DELIVERED

    @property
    def timed_out(self) -> bool:
        return bool(self.details.get("timed_out"))

    @classmethod
    def delivered(cls, response: Any, *, url: str) -> "InjectionResult":
        return cls(outcome=Outcome.DELIVERED, response=response, details={"url": url})

    @classmethod
    def from_error(cls, error: FaultBridgeError) -> "InjectionResult":
        if isinstance(error, MissingParameterError):
            outcome = Outcome.MISSING_PARAMETER
        elif isinstance(error, PayloadBuildError):
            outcome = Outcome.PAYLOAD_BUILD_FAILED
        elif isinstance(error, ResultDecodeError):
            outcome = Outcome.RESULT_DECODE_FAILED
        elif isinstance(error, AgentTransportError):
            outcome = Outcome.TRANSPORT_FAILED
        else:
            raise TypeError(f"No outcome for {type(error).__name__}")
        return cls(outcome=outcome, message=error.message, details=dict(error.details))

    def raise_for_outcome(self) -> None:
        """Raise the typed exception matching a failed outcome."""
        details = dict(self.details)
        if self.outcome == Outcome.DELIVERED:
            return
        if self.outcome == Outcome.MISSING_PARAMETER:
            raise MissingParameterError(details.get("flag", ""), details=details)
        if self.outcome == Outcome.PAYLOAD_BUILD_FAILED:
            raise PayloadBuildError(
                self.message, url=details.get("url"), details=details
            )
        if self.outcome == Outcome.RESULT_DECODE_FAILED:
            raise ResultDecodeError(
                self.message, body=details.get("body", ""), details=details
            )
        raise AgentTransportError(
            self.message,
            url=details.get("url", ""),
            status_code=details.get("status_code"),
            body=details.get("body"),
            timed_out=bool(details.get("timed_out")),
            details=details,
        )


class ActionFlag(BaseModel):
    """Self-description an action gives for one of its parameters."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    desc: str = ""
    no_args: bool = False
    required: bool = False


class FlagSchema(BaseModel):
    """Flag as advertised to the orchestration layer for command registration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    desc: str = ""
    no_args: bool = False
    required: bool = False
    required_when_destroyed: bool = False
    default: str = ""


class ActionFlagSchema(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    aliases: List[str] = Field(default_factory=list)
    short_desc: str = ""
    long_desc: str = ""
    categories: List[str] = Field(default_factory=list)
    matchers: List[FlagSchema] = Field(default_factory=list)
    flags: List[FlagSchema] = Field(default_factory=list)
    process_hang: bool = False


class ExpCommandModel(BaseModel):
    """One experiment target (e.g. ``go``) with its actions and shared flags."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    short_desc: str
    long_desc: str
    executor: str
    actions: List[ActionFlagSchema] = Field(default_factory=list)
    flags: List[FlagSchema] = Field(default_factory=list)
    scope: str = ""


class ExpModels(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    version: str = "v1"
    kind: str = "plugin"
    models: List[ExpCommandModel] = Field(default_factory=list)
