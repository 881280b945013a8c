"""
数据模型定义

指标表、采集结果与构建信息
"""

from typing import List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field


class MetricField(NamedTuple):
    """nvidia-smi 查询字段与指标名的对应关系"""
    query_field: str
    metric_name: str


# 设备标识字段，固定位于每行的前两列
IDENTITY_FIELDS = ("name", "index")

# 指标表：顺序即 nvidia-smi 输出列顺序（不含标识列）
GPU_METRICS = (
    MetricField("power.draw", "gpu_power_draw"),
    MetricField("power.limit", "gpu_power_limit"),

    MetricField("clocks.gr", "gpu_clock_shader_current"),
    MetricField("clocks.max.gr", "gpu_clock_shader_maximum"),
    MetricField("clocks.sm", "gpu_clock_streaming_multiprocessor_current"),
    MetricField("clocks.max.sm", "gpu_clock_streaming_multiprocessor_maximum"),
    MetricField("clocks.mem", "gpu_clock_memory_current"),
    MetricField("clocks.max.mem", "gpu_clock_memory_maximum"),

    MetricField("temperature.gpu", "gpu_temperature_processor"),
    MetricField("temperature.memory", "gpu_temperature_memory"),

    MetricField("utilization.gpu", "gpu_utilization_processor"),
    MetricField("utilization.memory", "gpu_utilization_memory"),
    MetricField("fan.speed", "gpu_utilization_fan"),

    MetricField("memory.free", "gpu_memory_free"),
    MetricField("memory.used", "gpu_memory_used"),
    MetricField("memory.total", "gpu_memory_total"),
)

GPU_COUNT_METRIC = "gpu_count"


def query_fields(metrics=GPU_METRICS) -> List[str]:
    """返回 --query-gpu 参数使用的完整字段列表（标识字段在前）"""
    return list(IDENTITY_FIELDS) + [m.query_field for m in metrics]


def metric_names(metrics=GPU_METRICS) -> List[str]:
    """返回与数据列位置对齐的指标名列表"""
    return [m.metric_name for m in metrics]


class CommandOutput(NamedTuple):
    """外部命令执行结果"""
    stdout: bytes
    error: Optional[str] = None


class Sample(NamedTuple):
    """单个指标样本"""
    metric_name: str
    device_label: str
    value: str


class ScrapeResult(NamedTuple):
    """
    一次抓取的结果

    成功时 rows 为解析出的行，失败时 rows 为空且 error 记录原因
    """
    rows: List[List[str]]
    error: Optional[str] = None

    @classmethod
    def success(cls, rows: List[List[str]]) -> "ScrapeResult":
        return cls(rows=rows)

    @classmethod
    def failure(cls, reason: str) -> "ScrapeResult":
        return cls(rows=[], error=reason)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def device_count(self) -> int:
        return len(self.rows) if self.ok else 0


class BuildInfo(BaseModel):
    """构建信息（只读）"""
    model_config = ConfigDict(frozen=True)

    build_time: str = Field(default="unset", description="构建时间")
    commit: str = Field(default="unset", description="构建时的提交哈希")
    release: str = Field(default="unset", description="语义化版本号")

    def as_page_items(self) -> List[tuple]:
        """首页展示用的 (名称, 值) 列表"""
        return [
            ("Buildtime", self.build_time),
            ("Commit", self.commit),
            ("Release", self.release),
        ]
