"""
测试配置加载
"""

import pytest
from pydantic import ValidationError

from gpu_exporter import __version__
from gpu_exporter.config import ExporterConfig, load_config


class TestExporterConfig:

    def test_defaults(self):
        config = ExporterConfig()
        assert config.host == "0.0.0.0"
        assert config.port == 9101
        assert config.nvidia_smi == "nvidia-smi"
        assert config.query_timeout == 10.0
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_port_env(self, monkeypatch):
        """测试：环境变量 PORT 覆盖默认端口"""
        monkeypatch.setenv("PORT", "9200")
        assert ExporterConfig().port == 9200

    def test_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("GPU_EXPORTER_NVIDIA_SMI", "/opt/bin/nvidia-smi")
        monkeypatch.setenv("GPU_EXPORTER_QUERY_TIMEOUT", "2.5")
        config = ExporterConfig()
        assert config.nvidia_smi == "/opt/bin/nvidia-smi"
        assert config.query_timeout == 2.5

    def test_invalid_port(self, monkeypatch):
        monkeypatch.setenv("PORT", "70000")
        with pytest.raises(ValidationError):
            ExporterConfig()

    def test_log_level_normalized(self):
        assert ExporterConfig(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            ExporterConfig(log_level="verbose")

    def test_build_info(self):
        config = ExporterConfig(commit="abc1234")
        info = config.build_info
        assert info.commit == "abc1234"
        assert info.build_time == "unset"
        assert info.release == __version__
        with pytest.raises(ValidationError):
            info.commit = "other"


class TestLoadConfig:

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("port: 9300\nnvidia_smi: /usr/local/bin/nvidia-smi\n", encoding="utf-8")

        config = load_config(str(path))

        assert config.port == 9300
        assert config.nvidia_smi == "/usr/local/bin/nvidia-smi"

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        """测试：环境变量优先于配置文件"""
        path = tmp_path / "config.yaml"
        path.write_text("port: 9300\n", encoding="utf-8")
        monkeypatch.setenv("PORT", "9400")

        assert load_config(str(path)).port == 9400

    def test_env_config_path(self, tmp_path, monkeypatch):
        path = tmp_path / "exporter.yaml"
        path.write_text("host: 127.0.0.1\n", encoding="utf-8")
        monkeypatch.setenv("GPU_EXPORTER_CONFIG", str(path))

        assert load_config().host == "127.0.0.1"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(str(path)).port == 9101

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_default_missing_file_uses_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setattr("gpu_exporter.config.DEFAULT_CONFIG_PATH", str(tmp_path / "none.yaml"))
        assert load_config().port == 9101

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(str(path))
