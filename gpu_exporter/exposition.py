"""
Prometheus 文本格式输出

只输出裸指标行，不包含 HELP/TYPE 注释
"""

from typing import Iterable, Sequence

from .mapper import map_rows
from .models import GPU_COUNT_METRIC, Sample, ScrapeResult

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


def escape_label_value(value: str) -> str:
    """转义标签值中的反斜杠、双引号和换行"""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def render_samples(samples: Iterable[Sample], device_count: int) -> str:
    """
    渲染样本

    Args:
        samples: 样本列表
        device_count: 设备数量

    Returns:
        每个样本一行，最后固定一行 gpu_count{} N
    """
    lines = [
        f'{s.metric_name}{{gpu="{escape_label_value(s.device_label)}"}} {s.value}\n'
        for s in samples
    ]
    lines.append(f"{GPU_COUNT_METRIC}{{}} {device_count}\n")
    return "".join(lines)


def render_result(result: ScrapeResult, names: Sequence[str]) -> str:
    """渲染一次抓取结果，失败时输出 gpu_count{} 0"""
    if not result.ok:
        return render_samples([], 0)
    return render_samples(map_rows(result.rows, names), result.device_count)
