"""
首页 HTML
"""

from html import escape
from typing import Sequence

from .models import BuildInfo

PAGE_TITLE = "Prometheus nVidia GPU Metrics Exporter"


def render_home(metrics: Sequence[str], build_info: BuildInfo, title: str = PAGE_TITLE) -> str:
    """渲染首页：指标列表和构建信息"""
    metric_items = "\n".join(
        f"      <li><code>{escape(name)}</code></li>" for name in metrics
    )
    version_items = "\n".join(
        f"      <tr><th>{escape(key)}</th><td>{escape(value)}</td></tr>"
        for key, value in build_info.as_page_items()
    )
    return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>{escape(title)}</title>
  </head>
  <body>
    <h1>{escape(title)}</h1>
    <p>Metrics are exposed at <a href="/metrics/">/metrics/</a>.</p>
    <h2>Metrics</h2>
    <ul>
{metric_items}
    </ul>
    <h2>Version</h2>
    <table>
{version_items}
    </table>
  </body>
</html>
"""
