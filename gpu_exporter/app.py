"""
FastAPI 应用

提供 HTTP 接口供 Prometheus 拉取指标
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from . import __version__
from .config import ExporterConfig, load_config
from .exposition import CONTENT_TYPE, render_samples
from .models import GPU_COUNT_METRIC, GPU_METRICS, metric_names
from .pages import render_home
from .pipeline import collect_metrics

logger = logging.getLogger(__name__)


def create_app(config: Optional[ExporterConfig] = None) -> FastAPI:
    """
    创建 FastAPI 应用实例

    Args:
        config: Exporter 配置，默认调用 load_config()

    Returns:
        FastAPI 应用
    """
    if config is None:
        config = load_config()

    build_info = config.build_info
    exposed_metrics = metric_names(GPU_METRICS) + [GPU_COUNT_METRIC]

    app = FastAPI(
        title="GPU Metrics Exporter",
        version=__version__,
        description="Prometheus nVidia GPU 指标导出服务",
        docs_url=None,
        redoc_url=None,
    )

    @app.get("/", response_class=HTMLResponse)
    async def home():
        """首页：指标列表和构建信息"""
        return HTMLResponse(render_home(exposed_metrics, build_info))

    @app.get("/healthz")
    async def healthz():
        """存活探针"""
        return Response(status_code=200)

    @app.get("/metrics", response_class=PlainTextResponse)
    @app.get("/metrics/", response_class=PlainTextResponse)
    async def metrics():
        """
        指标端点

        任何采集错误都不会返回错误状态码，只输出 gpu_count{} 0
        """
        try:
            body = await collect_metrics(config)
        except Exception as e:
            logger.error(f"Scrape failed: {e}", exc_info=True)
            body = render_samples([], 0)
        return PlainTextResponse(body, media_type=CONTENT_TYPE)

    return app
