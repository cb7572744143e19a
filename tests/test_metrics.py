"""Tests for OTel metrics recording paths."""

import pytest
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from blog_api import metrics as app_metrics
from blog_api.authors import AuthorService
from blog_api.errors import NotFoundError
from blog_api.models import SeedFile, SeedPost
from blog_api.seed import seed_store
from blog_api.store import MemoryPostStore
from tests.conftest import ANN, VALID_CONTENT, make_draft


@pytest.fixture
def reader(monkeypatch: pytest.MonkeyPatch) -> InMemoryMetricReader:
    """Swap the instruments used by the store and seed loader for in-memory ones."""
    reader = InMemoryMetricReader()
    meter = MeterProvider(metric_readers=[reader]).get_meter(app_metrics.METER_NAME)
    monkeypatch.setattr(
        "blog_api.store.post_operations_total", meter.create_counter("post_operations_total")
    )
    monkeypatch.setattr(
        "blog_api.store.post_rejections_total", meter.create_counter("post_rejections_total")
    )
    monkeypatch.setattr("blog_api.seed.seed_posts_total", meter.create_counter("seed_posts_total"))
    return reader


def _points(reader: InMemoryMetricReader, name: str) -> dict[tuple[tuple[str, str], ...], int]:
    """Map sorted attribute items -> counter value for one metric."""
    data = reader.get_metrics_data()
    result: dict[tuple[tuple[str, str], ...], int] = {}
    if data is None:
        return result
    for resource_metrics in data.resource_metrics:
        for scope_metrics in resource_metrics.scope_metrics:
            for metric in scope_metrics.metrics:
                if metric.name != name:
                    continue
                for point in metric.data.data_points:
                    key = tuple(sorted((k, str(v)) for k, v in point.attributes.items()))
                    result[key] = point.value
    return result


async def test_store_counts_outcomes(reader: InMemoryMetricReader) -> None:
    store = MemoryPostStore()
    await store.create(make_draft(), ANN)
    with pytest.raises(NotFoundError):
        await store.get(5, ANN)

    ops = _points(reader, "post_operations_total")
    assert ops[(("operation", "create"), ("outcome", "ok"))] == 1
    assert ops[(("operation", "get"), ("outcome", "not_found"))] == 1
    assert _points(reader, "post_rejections_total") == {(("kind", "post_not_found"),): 1}


async def test_seed_counts_outcomes(reader: InMemoryMetricReader) -> None:
    data = SeedFile(
        posts=[
            SeedPost(title="Good Post", content=VALID_CONTENT, author="Writer"),
            SeedPost(title="Good Post", content=VALID_CONTENT, author="Writer"),
        ]
    )
    await seed_store(MemoryPostStore(), AuthorService(), data)

    seeded = _points(reader, "seed_posts_total")
    assert seeded == {(("outcome", "created"),): 1, (("outcome", "rejected"),): 1}
