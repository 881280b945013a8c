"""
抓取流程

采集 -> 解析 -> 映射 -> 渲染，每次请求独立执行，不保留任何状态
"""

import logging
from typing import Optional

from .collectors import run_query
from .config import ExporterConfig
from .exposition import render_result
from .models import GPU_METRICS, ScrapeResult, metric_names, query_fields
from .parser import ParseError, parse_rows

logger = logging.getLogger(__name__)


async def scrape(config: ExporterConfig, log: Optional[logging.Logger] = None) -> ScrapeResult:
    """
    执行一次采集并解析

    Args:
        config: Exporter 配置
        log: 记录失败原因的日志器，默认使用模块日志器

    Returns:
        ScrapeResult，失败时携带原因
    """
    log = log or logger

    output = await run_query(
        query_fields(GPU_METRICS),
        binary=config.nvidia_smi,
        timeout=config.query_timeout,
    )
    if output.error is not None:
        log.warning(f"Reporting zero GPUs, nvidia-smi query failed: {output.error}")
        return ScrapeResult.failure(output.error)

    try:
        rows = parse_rows(output.stdout)
    except ParseError as e:
        log.error(f"Failed to parse nvidia-smi output: {e}")
        return ScrapeResult.failure(f"parse error: {e}")

    log.debug(f"Parsed {len(rows)} GPU row(s)")
    return ScrapeResult.success(rows)


async def collect_metrics(config: ExporterConfig, log: Optional[logging.Logger] = None) -> str:
    """执行完整抓取流程，返回 Prometheus 文本"""
    result = await scrape(config, log)
    return render_result(result, metric_names(GPU_METRICS))
