"""
配置管理模块

从 YAML 文件加载配置，支持环境变量覆盖（环境变量优先）
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__
from .models import BuildInfo

DEFAULT_CONFIG_PATH = "/etc/gpu-exporter/config.yaml"
DEFAULT_PORT = 9101


class ExporterConfig(BaseSettings):
    """Exporter 配置模型"""

    model_config = SettingsConfigDict(
        env_prefix="GPU_EXPORTER_",
        populate_by_name=True,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="监听地址")
    port: int = Field(
        default=DEFAULT_PORT,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
        description="监听端口，环境变量 PORT 覆盖",
    )
    nvidia_smi: str = Field(default="nvidia-smi", description="nvidia-smi 可执行文件")
    query_timeout: float = Field(default=10.0, gt=0, description="单次查询超时（秒）")
    log_level: str = Field(default="INFO", description="日志级别")
    log_file: Optional[str] = Field(default=None, description="日志文件路径（可选）")
    build_time: str = Field(default="unset", description="构建时间")
    commit: str = Field(default="unset", description="构建时的提交哈希")
    release: str = Field(default=__version__, description="发布版本")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # 环境变量覆盖配置文件中的值
        return env_settings, init_settings, file_secret_settings

    @property
    def build_info(self) -> BuildInfo:
        """获取构建信息"""
        return BuildInfo(
            build_time=self.build_time,
            commit=self.commit,
            release=self.release,
        )


def load_config(config_path: Optional[str] = None) -> ExporterConfig:
    """
    加载配置

    优先级：
    1. 环境变量（PORT、GPU_EXPORTER_*）
    2. 配置文件（参数指定 > GPU_EXPORTER_CONFIG > 默认路径）
    3. 内置默认值

    Args:
        config_path: 配置文件路径

    Returns:
        ExporterConfig 实例

    Raises:
        FileNotFoundError: 显式指定的配置文件不存在
        ValueError: 配置文件内容不是映射
    """
    explicit = config_path is not None or "GPU_EXPORTER_CONFIG" in os.environ
    if config_path is None:
        config_path = os.getenv("GPU_EXPORTER_CONFIG", DEFAULT_CONFIG_PATH)

    config_file = Path(config_path)
    if not config_file.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        # 默认路径不存在时使用默认配置
        return ExporterConfig()

    with open(config_file, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f) or {}

    if not isinstance(raw_config, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    return ExporterConfig(**raw_config)
