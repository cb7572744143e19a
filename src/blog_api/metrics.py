"""Shared OTel metrics instruments for the service."""

from opentelemetry import metrics

METER_NAME = "blog_api"

meter = metrics.get_meter(METER_NAME)

post_operations_total = meter.create_counter(
    name="post_operations_total",
    description="Post store operations by operation and outcome",
    unit="1",
)

post_rejections_total = meter.create_counter(
    name="post_rejections_total",
    description="Post store operations rejected, by error kind",
    unit="1",
)

login_attempts_total = meter.create_counter(
    name="login_attempts_total",
    description="Login attempts by outcome",
    unit="1",
)

seed_posts_total = meter.create_counter(
    name="seed_posts_total",
    description="Seed posts processed at startup, by outcome",
    unit="1",
)
