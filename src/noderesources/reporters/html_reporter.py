"""
Renders cluster metrics as a standalone HTML dashboard page.
"""

import html
import logging
from typing import List

from ..models.resources import ClusterMetrics, NodeMetrics
from .base_reporter import COLUMN_TITLES, BaseReporter, node_row, total_row

logger = logging.getLogger(__name__)

# CSS class of each value column, after the Node and Node Type columns.
_VALUE_CLASSES = [
    "physical-metrics",
    "requested-metrics",
    "limited-metrics",
    "used-metrics",
] * 2

_STYLE = """
    .header-row, .total-row { background-color: lightgray; font-weight: bold; }
    .physical-metrics { background-color: lightblue; }
    .requested-metrics { background-color: #bddabd; }
    .limited-metrics { background-color: #d4bbbb; }
    .used-metrics { background-color: #dfb684; color: darkblue; }
    .center-text { text-align: center; }
"""


def _labels_tooltip(node: NodeMetrics) -> str:
    """One 'key: value' line per label, as an escaped attribute value."""
    lines = [f"{key}: {value}" for key, value in sorted(node.labels.items())]
    return "&#10;".join(html.escape(line, quote=True) for line in lines)


class HTMLReporter(BaseReporter):
    """Builds the dashboard page served by the API's /metrics route."""

    def __init__(self, download_url: str = "/download/excel", metrics_url: str = "/metrics"):
        self.download_url = download_url
        self.metrics_url = metrics_url

    def report(self, data: ClusterMetrics) -> str:
        return self.render(data)

    def render(self, data: ClusterMetrics) -> str:
        header_cells = "".join(f"<th>{html.escape(title)}</th>" for title in COLUMN_TITLES)
        rows: List[str] = [f'<tr class="header-row">{header_cells}</tr>']

        for node in data.nodes:
            values = node_row(node)
            cells = [
                f'<td class="header-row">{html.escape(values[0])}</td>',
                f"<td>{html.escape(values[1])}</td>",
            ]
            cells.extend(
                f'<td class="{css} center-text">{html.escape(value)}</td>'
                for css, value in zip(_VALUE_CLASSES, values[2:])
            )
            rows.append(f'<tr title="{_labels_tooltip(node)}">{"".join(cells)}</tr>')

        totals = total_row(data)
        total_cells = ["<th>Total</th>", "<th></th>"]
        total_cells.extend(
            f'<th class="{css}">{html.escape(value)}</th>' for css, value in zip(_VALUE_CLASSES, totals[2:])
        )
        rows.append(f'<tr class="total-row">{"".join(total_cells)}</tr>')

        hint = "; ".join(
            f"{name}: {self.metrics_url}?node-type={name}" for name in ("worker", "infra", "master")
        ) + f"; all: {self.metrics_url}"

        return (
            "<!DOCTYPE html>\n"
            "<html>\n<head>\n<title>Cluster Metrics</title>\n"
            f"<style>{_STYLE}</style>\n"
            "</head>\n<body>\n"
            "<h1>Cluster Metrics</h1>\n"
            f"<p>Node type: {html.escape(data.node_type_filter.value)}</p>\n"
            '<table border="1">\n' + "\n".join(rows) + "\n</table>\n"
            f"<p>optional params {html.escape(hint)}</p>\n"
            f'<p><a href="{html.escape(self.download_url, quote=True)}">Download Excel</a></p>\n'
            "</body>\n</html>\n"
        )
