"""Tagged outcome of a chart series lookup."""

from dataclasses import dataclass, field
from enum import Enum

from pricechart.core.exceptions import SourceError

from .sample import Sample


class ResultKind(str, Enum):
    """结果类型枚举."""

    PRIMARY = "primary"
    FALLBACK = "fallback"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SeriesResult:
    """数据源编排的结果.

    ``cause`` 记录触发降级的上游错误，``error`` 记录最终失败原因。
    """

    kind: ResultKind
    timeframe: str
    series: list[Sample] = field(default_factory=list)
    error: SourceError | None = None
    cause: SourceError | None = None

    @classmethod
    def primary(cls, timeframe: str, series: list[Sample]) -> "SeriesResult":
        return cls(ResultKind.PRIMARY, timeframe, series)

    @classmethod
    def fallback(cls, timeframe: str, series: list[Sample], cause: SourceError) -> "SeriesResult":
        return cls(ResultKind.FALLBACK, timeframe, series, cause=cause)

    @classmethod
    def failed(
        cls,
        timeframe: str,
        error: SourceError,
        cause: SourceError | None = None,
    ) -> "SeriesResult":
        return cls(ResultKind.FAILED, timeframe, error=error, cause=cause)

    @property
    def ok(self) -> bool:
        return self.kind is not ResultKind.FAILED

    @property
    def degraded(self) -> bool:
        return self.kind is ResultKind.FALLBACK
