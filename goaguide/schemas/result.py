"""
schemas/result.py
-----------------
Outcome type for calls to external collaborators (weather, routing, LLM).

Every such call returns a DependencyResult instead of raising; the call
site decides the fallback explicitly:

    reading = weather_tool.fetch("Goa").unwrap_or(WeatherReading.default())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class DependencyError:
    dependency: str      # "weather" | "routing" | "day_tip"
    reason: str

    def __str__(self) -> str:
        return f"{self.dependency}: {self.reason}"


@dataclass(frozen=True)
class DependencyResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[DependencyError] = None

    @classmethod
    def success(cls, value: T) -> "DependencyResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, dependency: str, reason: str) -> "DependencyResult[T]":
        return cls(error=DependencyError(dependency, reason))

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, fallback: T) -> T:
        return self.value if self.error is None else fallback
