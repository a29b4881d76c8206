"""Uniform outcome envelope for tool executions."""

from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from agent_tools.models.tool import ToolCategory

T = TypeVar("T")


class ToolExecutionStatus(str, Enum):
    """Status of a tool execution."""
    SUCCESS = "success"
    ERROR = "error"
    PARTIAL = "partial"


class RateLimitInfo(BaseModel):
    """Rate limit information reported by a tool's backing service."""
    remaining: int
    reset: int  # unix timestamp


class ResponseMetadata(BaseModel):
    """Execution metadata; extra keys are allowed."""
    model_config = ConfigDict(extra="allow")

    execution_time: int = Field(0, description="Wall-clock milliseconds")
    category: Optional[ToolCategory] = None
    rate_limit: Optional[RateLimitInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"executionTime": self.execution_time}
        if self.category is not None:
            data["category"] = self.category.value
        if self.rate_limit is not None:
            data["rateLimit"] = self.rate_limit.model_dump()
        if self.model_extra:
            data.update(self.model_extra)
        return data


class ToolResponse(BaseModel, Generic[T]):
    """
    Envelope returned (or streamed) for every tool invocation.

    ``data`` is meaningful iff ``status`` is success; ``error`` is set iff
    ``status`` is error or partial.
    """
    status: ToolExecutionStatus
    data: Optional[T] = None
    error: Optional[str] = None
    error_details: Optional[Dict[str, Any]] = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

    @model_validator(mode="after")
    def _check_exclusivity(self) -> "ToolResponse":
        if self.status == ToolExecutionStatus.SUCCESS:
            if self.error is not None:
                raise ValueError("successful responses cannot carry an error")
        else:
            if not self.error:
                raise ValueError(f"{self.status.value} responses require an error message")
            if self.data is not None:
                raise ValueError(f"{self.status.value} responses cannot carry data")
        return self

    @classmethod
    def success(
        cls,
        data: Any,
        execution_time: int = 0,
        category: Optional[ToolCategory] = None,
    ) -> "ToolResponse":
        return cls(
            status=ToolExecutionStatus.SUCCESS,
            data=data,
            metadata=ResponseMetadata(execution_time=execution_time, category=category),
        )

    @classmethod
    def failure(
        cls,
        error: str,
        execution_time: int = 0,
        category: Optional[ToolCategory] = None,
        error_details: Optional[Dict[str, Any]] = None,
    ) -> "ToolResponse":
        return cls(
            status=ToolExecutionStatus.ERROR,
            error=error,
            error_details=error_details,
            metadata=ResponseMetadata(execution_time=execution_time, category=category),
        )

    @property
    def ok(self) -> bool:
        return self.status == ToolExecutionStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase field names agents expect."""
        payload: Dict[str, Any] = {"status": self.status.value}
        if self.ok:
            payload["data"] = self.data
        else:
            payload["error"] = self.error
        if self.error_details is not None:
            payload["errorDetails"] = self.error_details
        payload["metadata"] = self.metadata.to_dict()
        return payload
