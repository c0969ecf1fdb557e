"""配置管理模块 - 处理pricechart服务的配置"""

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger


@dataclass
class ServerConfig:
    """HTTP 服务配置"""

    host: str = "0.0.0.0"
    port: int = 3000


@dataclass
class CacheConfig:
    """历史缓存文件配置"""

    path: str = str(Path("data") / "historical_data_cache.json")


@dataclass
class RealtimeConfig:
    """实时数据源配置"""

    endpoint: str = ""
    timeout: float = 10.0
    max_points: int = 99

    @property
    def configured(self) -> bool:
        return bool(self.endpoint)


@dataclass
class LoggingConfig:
    """日志配置"""

    level: str = "INFO"
    file: str | None = None


@dataclass
class ChartConfig:
    """pricechart主配置"""

    server: ServerConfig = field(default_factory=ServerConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    realtime: RealtimeConfig = field(default_factory=RealtimeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ChartConfig":
        """从字典创建配置"""
        return cls(
            server=ServerConfig(**config_dict.get("server", {})),
            cache=CacheConfig(**config_dict.get("cache", {})),
            realtime=RealtimeConfig(**config_dict.get("realtime", {})),
            logging=LoggingConfig(**config_dict.get("logging", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {
            "server": asdict(self.server),
            "cache": asdict(self.cache),
            "realtime": asdict(self.realtime),
            "logging": asdict(self.logging),
        }


def _deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
    """深度更新字典"""
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = _deep_update(d.get(k, {}), v)
        else:
            d[k] = v
    return d


class ConfigManager:
    """配置管理器

    先读取 TOML 配置文件 (可选)，再用环境变量覆盖。
    """

    def __init__(self, config_path: Path | None = None, environ: dict[str, str] | None = None):
        """初始化配置管理器

        Args:
            config_path: 配置文件路径，为None时读取 ``PRICECHART_CONFIG``
            environ: 环境变量映射，默认使用 ``os.environ``
        """
        self.environ = os.environ if environ is None else environ
        configured_path = self.environ.get("PRICECHART_CONFIG")
        self.config_path = config_path or (Path(configured_path) if configured_path else None)
        self.config = self._load_config()

    def _load_config(self) -> ChartConfig:
        """加载配置"""
        config_dict = self._load_file()
        _deep_update(config_dict, load_config_from_env(self.environ))
        return ChartConfig.from_dict(config_dict)

    def _load_file(self) -> dict[str, Any]:
        if self.config_path is None or not self.config_path.exists():
            return {}
        try:
            with open(self.config_path, "rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            # 配置文件有问题时使用默认配置
            logger.warning(f"Failed to load config from {self.config_path}: {e}")
            return {}

    def get_config(self) -> ChartConfig:
        """获取当前配置"""
        return self.config

    def update_config(self, **updates: Any) -> None:
        """更新配置"""
        config_dict = _deep_update(self.config.to_dict(), updates)
        self.config = ChartConfig.from_dict(config_dict)


def get_default_config() -> ChartConfig:
    """获取默认配置"""
    return ChartConfig()


def load_config_from_env(environ: dict[str, str] | None = None) -> dict[str, Any]:
    """从环境变量加载配置"""
    env = os.environ if environ is None else environ
    config: dict[str, Any] = {}

    # 服务配置
    server_config: dict[str, Any] = {}
    port = env.get("PORT")
    if port:
        server_config["port"] = int(port)
    host = env.get("HOST")
    if host:
        server_config["host"] = host
    if server_config:
        config["server"] = server_config

    # 缓存配置
    cache_path = env.get("HISTORICAL_CACHE_PATH")
    if cache_path:
        config["cache"] = {"path": cache_path}

    # 实时数据源配置
    realtime_config: dict[str, Any] = {}
    endpoint = env.get("REAL_TIME_API_ENDPOINT")
    if endpoint is not None:
        realtime_config["endpoint"] = endpoint.strip()
    timeout = env.get("REAL_TIME_TIMEOUT")
    if timeout:
        realtime_config["timeout"] = float(timeout)
    if realtime_config:
        config["realtime"] = realtime_config

    # 日志配置
    logging_config: dict[str, Any] = {}
    level = env.get("LOG_LEVEL")
    if level:
        logging_config["level"] = level.upper()
    log_file = env.get("LOG_FILE")
    if log_file:
        logging_config["file"] = log_file
    if logging_config:
        config["logging"] = logging_config

    return config
