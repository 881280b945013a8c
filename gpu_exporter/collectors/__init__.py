"""
数据采集器模块

目前只包含 nvidia-smi 采集器
"""

from .nvidia_smi import build_command, run_query

__all__ = [
    "build_command",
    "run_query",
]
