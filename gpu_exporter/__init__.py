"""
GPU Metrics Exporter - Prometheus nVidia GPU 指标导出服务

负责：
- 每次抓取时调用 nvidia-smi 查询所有 GPU
- 解析 CSV 输出并映射为带设备标签的指标
- 以 Prometheus 文本格式通过 HTTP 暴露
"""

__version__ = "1.0.0"
