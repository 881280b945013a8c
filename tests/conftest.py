"""
测试公共 fixture
"""

import os
import stat
import sys
from pathlib import Path

import pytest

# 添加项目路径到 sys.path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gpu_exporter.config import ExporterConfig


H100_ROWS = (
    "NVIDIA H100 80GB HBM3, 0, 71.52, 700.00, 345, 1980, 345, 1980, 2619, 2619, "
    "32, 43, 0, 0, [N/A], 81008, 1, 81559\n"
    "NVIDIA H100 80GB HBM3, 1, 69.80, 700.00, 345, 1980, 345, 1980, 2619, 2619, "
    "30, 41, 5, 1, [N/A], 80000, 1009, 81559\n"
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """清除会影响配置的环境变量"""
    for key in list(os.environ):
        if key == "PORT" or key.startswith("GPU_EXPORTER_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fake_smi(tmp_path):
    """
    生成一个代替 nvidia-smi 的脚本

    返回工厂函数: fake_smi(stdout="", exit_code=0, stderr="", delay=0) -> 脚本路径
    """
    counter = {"n": 0}

    def _make(stdout: str = "", exit_code: int = 0, stderr: str = "", delay: float = 0) -> str:
        counter["n"] += 1
        out_file = tmp_path / f"smi-{counter['n']}.out"
        out_file.write_text(stdout, encoding="utf-8")
        args_file = tmp_path / f"smi-{counter['n']}.args"

        script = tmp_path / f"nvidia-smi-{counter['n']}"
        lines = ["#!/bin/sh", f'echo "$@" > "{args_file}"']
        if delay:
            lines.append(f"sleep {delay}")
        lines.append(f'cat "{out_file}"')
        if stderr:
            lines.append(f"echo '{stderr}' >&2")
        lines.append(f"exit {exit_code}")
        script.write_text("\n".join(lines) + "\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return _make


@pytest.fixture
def make_config():
    """创建指向指定 nvidia-smi 的配置"""
    def _make(binary: str, timeout: float = 5.0) -> ExporterConfig:
        return ExporterConfig(nvidia_smi=binary, query_timeout=timeout)

    return _make
