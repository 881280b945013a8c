"""
GPU 采集器

通过 nvidia-smi 查询 GPU 指标，返回原始 CSV 输出
"""

import asyncio
import logging
from typing import List

from ..models import CommandOutput

logger = logging.getLogger(__name__)

QUERY_FORMAT = "csv,noheader,nounits"


def build_command(fields: List[str], binary: str = "nvidia-smi") -> List[str]:
    """构造 nvidia-smi 参数列表"""
    return [
        binary,
        f"--query-gpu={','.join(fields)}",
        f"--format={QUERY_FORMAT}",
    ]


async def run_query(
    fields: List[str],
    binary: str = "nvidia-smi",
    timeout: float = 10.0,
) -> CommandOutput:
    """
    执行一次 nvidia-smi 查询

    每次调用启动一个子进程，不复用。失败时只记录日志，不抛出异常。

    Args:
        fields: 查询字段（按输出列顺序）
        binary: nvidia-smi 可执行文件
        timeout: 超时时间（秒），超时后终止子进程

    Returns:
        CommandOutput，失败时 stdout 为空且 error 记录原因
    """
    cmd = build_command(fields, binary)

    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )
    except OSError as e:
        # 无驱动 / 未安装 nvidia-smi
        error = f"failed to start {binary}: {e}"
        logger.error(error)
        return CommandOutput(stdout=b"", error=error)

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        error = f"{binary} timed out after {timeout}s"
        logger.error(error)
        return CommandOutput(stdout=b"", error=error)

    if proc.returncode != 0:
        detail = stderr.decode("utf-8", errors="replace").strip()
        error = f"{binary} exited with status {proc.returncode}"
        if detail:
            error = f"{error}: {detail}"
        logger.error(error)
        return CommandOutput(stdout=b"", error=error)

    return CommandOutput(stdout=stdout)
