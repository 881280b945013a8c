"""
指标映射

将解析出的行按列位置映射为 (指标名, 设备标签, 值) 样本
"""

import logging
from typing import List, Sequence

from .models import Sample

logger = logging.getLogger(__name__)


def device_label(row: Sequence[str]) -> str:
    """设备标签，格式 name[index]"""
    return f"{row[0]}[{row[1]}]"


def is_numeric(value: str) -> bool:
    """
    判断单元格是否为数值

    "N/A"、"[Not Supported]"、空串等驱动占位值返回 False
    """
    if not value or value != value.strip() or "_" in value:
        return False
    try:
        float(value)
    except ValueError:
        return False
    return True


def map_rows(rows: Sequence[Sequence[str]], names: Sequence[str]) -> List[Sample]:
    """
    映射所有行

    前两列为设备标识，其余列与 names 按位置对齐。
    非数值单元格直接丢弃；多出的列忽略，缺失的列不补默认值。

    Args:
        rows: 解析后的行
        names: 指标名列表（与数据列位置对齐）

    Returns:
        样本列表，先按行顺序，再按列顺序
    """
    samples = []
    for row in rows:
        if len(row) < 2:
            logger.debug(f"Skipping row without device identity: {row!r}")
            continue

        label = device_label(row)
        for name, value in zip(names, row[2:]):
            if is_numeric(value):
                samples.append(Sample(name, label, value))

    return samples
