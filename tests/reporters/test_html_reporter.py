# tests/reporters/test_html_reporter.py

from factories import make_node
from noderesources.core.cluster_aggregator import fold_cluster_metrics
from noderesources.core.node_aggregator import build_node_metrics
from noderesources.models.resources import ClusterMetrics, UsageSample
from noderesources.reporters.html_reporter import HTMLReporter


def test_html_contains_rows_totals_and_download_link(worker_metrics):
    page = HTMLReporter().render(worker_metrics)

    assert page.startswith("<!DOCTYPE html>")
    assert page.count('class="total-row"') == 1
    assert page.index("worker-a") < page.index("worker-b") < page.index("Total")
    assert '<th class="physical-metrics">8.00</th>' in page
    assert '<th class="limited-metrics">1Gi</th>' in page
    assert '<a href="/download/excel">Download Excel</a>' in page
    assert "/metrics?node-type=infra" in page
    assert "Node type: worker" in page


def test_html_label_tooltip_is_escaped():
    node = make_node("edge-1", {"team": '<ops & "dev">', "zone": "a"})
    metrics = fold_cluster_metrics([build_node_metrics(node, [], UsageSample(node_name="edge-1", cpu="0", memory="0"))])

    page = HTMLReporter().render(metrics)

    assert 'title="team: &lt;ops &amp; &quot;dev&quot;&gt;&#10;zone: a"' in page
    assert "<ops" not in page


def test_html_custom_urls():
    page = HTMLReporter(download_url="/x.xlsx", metrics_url="/dash").report(ClusterMetrics())
    assert '<a href="/x.xlsx">' in page
    assert "/dash?node-type=worker" in page
    assert '<th class="physical-metrics">0.00</th>' in page
