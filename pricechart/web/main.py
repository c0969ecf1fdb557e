"""
Web 服务启动脚本
"""

import os

import uvicorn

from pricechart.core.config import ConfigManager


def main() -> None:
    """启动 FastAPI Web 服务"""

    config = ConfigManager().get_config()
    reload = os.getenv("PRICECHART_RELOAD", "false").lower() == "true"

    uvicorn.run(
        "pricechart.web.app:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
