"""标准化错误代码."""

from enum import Enum


class ErrorCode(str, Enum):
    """错误代码枚举."""

    GENERAL_ERROR = "GENERAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNSUPPORTED_TIMEFRAME = "UNSUPPORTED_TIMEFRAME"
    SOURCE_ERROR = "SOURCE_ERROR"
    CACHE_LOAD_ERROR = "CACHE_LOAD_ERROR"
    UPSTREAM_NOT_CONFIGURED = "UPSTREAM_NOT_CONFIGURED"
    UPSTREAM_STATUS_ERROR = "UPSTREAM_STATUS_ERROR"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    UPSTREAM_PAYLOAD_ERROR = "UPSTREAM_PAYLOAD_ERROR"
    UPSTREAM_NETWORK_ERROR = "UPSTREAM_NETWORK_ERROR"
