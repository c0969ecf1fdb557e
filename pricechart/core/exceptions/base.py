"""pricechart核心异常类."""

from typing import Any

from .codes import ErrorCode


class ChartDataError(Exception):
    """pricechart基础异常类."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.GENERAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        """初始化异常.

        Args:
            message: 错误消息
            error_code: 错误代码
            details: 额外详情
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        """Return a serializable payload representing the error."""

        return {
            "code": self.error_code.value,
            "message": self.message,
            "details": dict(self.details),
        }


class ValidationError(ChartDataError):
    """客户端请求参数错误，不重试."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, error_code, details)


class UnsupportedTimeframeError(ValidationError):
    """未知的时间框架."""

    def __init__(self, timeframe: str, details: dict[str, Any] | None = None):
        super_details = details or {}
        super_details["timeframe"] = timeframe
        super().__init__("Unsupported timeframe", ErrorCode.UNSUPPORTED_TIMEFRAME, super_details)
        self.timeframe = timeframe


class SourceError(ChartDataError):
    """数据源相关异常."""

    def __init__(
        self,
        message: str,
        source: str,
        error_code: ErrorCode = ErrorCode.SOURCE_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details["source"] = source
        super().__init__(message, error_code, super_details)
        self.source = source


class CacheLoadError(SourceError):
    """历史缓存文件缺失或损坏."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if path is not None:
            super_details["path"] = path
        super().__init__(message, "cache", ErrorCode.CACHE_LOAD_ERROR, super_details)
        self.path = path


class UpstreamError(SourceError):
    """实时数据源异常基类."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.SOURCE_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "realtime", error_code, details)


class UpstreamNotConfiguredError(UpstreamError):
    """未配置实时数据接口."""

    def __init__(self, message: str = "REAL_TIME_API_ENDPOINT is not configured"):
        super().__init__(message, ErrorCode.UPSTREAM_NOT_CONFIGURED)


class UpstreamStatusError(UpstreamError):
    """实时接口返回非成功状态码."""

    def __init__(self, status_code: int, details: dict[str, Any] | None = None):
        super_details = details or {}
        super_details["status_code"] = status_code
        super().__init__(f"Real-time API error: {status_code}", ErrorCode.UPSTREAM_STATUS_ERROR, super_details)
        self.status_code = status_code


class UpstreamTimeoutError(UpstreamError):
    """实时接口请求超时."""

    def __init__(self, timeout: float, details: dict[str, Any] | None = None):
        super_details = details or {}
        super_details["timeout"] = timeout
        super().__init__(f"Real-time API timed out after {timeout:g}s", ErrorCode.UPSTREAM_TIMEOUT, super_details)
        self.timeout = timeout


class UpstreamPayloadError(UpstreamError):
    """实时接口返回的数据无法解析."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.UPSTREAM_PAYLOAD_ERROR, details)


class UpstreamNetworkError(UpstreamError):
    """网络异常."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.UPSTREAM_NETWORK_ERROR, details)
