"""
GPU Metrics Exporter 主程序入口

使用方式:
    python -m gpu_exporter [config.yaml]
    或
    gpu-exporter [config.yaml]
"""

import asyncio
import logging
import sys
from pathlib import Path

import uvicorn
from pydantic import ValidationError

from . import __version__
from .app import create_app
from .config import DEFAULT_PORT, ExporterConfig, load_config

logger = logging.getLogger("gpu_exporter")


def setup_logging(config: ExporterConfig):
    """配置日志"""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    level = getattr(logging, config.log_level, logging.INFO)

    logging.basicConfig(
        level=level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(log_format))
        logging.getLogger().addHandler(file_handler)

    # 降低第三方库日志级别
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


async def serve(config: ExporterConfig):
    """
    运行 HTTP 服务

    uvicorn 负责 SIGINT/SIGTERM 处理，收到信号后优雅退出
    """
    app = create_app(config)

    server_config = uvicorn.Config(
        app=app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False
    )
    server = uvicorn.Server(server_config)

    logger.info(f"The service is listening on {config.port}")
    await server.serve()
    logger.info("The service is shutting down...")


def main():
    """主程序入口"""
    config_path = sys.argv[1] if len(sys.argv) > 1 else None

    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config)
    logger.info(f"Starting the service (version {__version__})...")
    logger.info(
        f"- PORT set to {config.port}. "
        f"If environment variable PORT is not set the default is {DEFAULT_PORT}"
    )

    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        pass
    logger.info("Done")


if __name__ == "__main__":
    main()
