# matchscore/metrics.py
"""
Prometheus metrics for score composition, batch scoring and score distribution.
"""

from prometheus_client import Counter, Histogram, Info, CollectorRegistry, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST

from matchscore.config import settings

# Create a custom registry for our metrics
registry = CollectorRegistry()

# Scoring Metrics
match_scores_total = Counter(
    'match_scores_total',
    'Total number of match scores computed',
    ['steam_strategy', 'availability_hint'],
    registry=registry
)

match_final_score = Histogram(
    'match_final_score',
    'Distribution of final match scores',
    ['steam_strategy'],
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
    registry=registry
)

match_scoring_duration_seconds = Histogram(
    'match_scoring_duration_seconds',
    'Score composition duration in seconds',
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1],
    registry=registry
)

# Batch Metrics
batch_candidates = Histogram(
    'batch_candidates',
    'Number of targets submitted per batch',
    buckets=[1, 5, 10, 20, 50, 100, 200, 500],
    registry=registry
)

batch_skipped_total = Counter(
    'batch_skipped_total',
    'Number of targets skipped because scoring failed',
    registry=registry
)

# Application Info
app_info = Info(
    'app_info',
    'Application information',
    registry=registry
)

app_info.info({
    'name': settings.app_name,
    'version': settings.app_version,
    'environment': settings.environment
})


def record_match_score(
    steam_strategy: str,
    availability_hint: str,
    final_score: int,
    duration: float
) -> None:
    """Record a single composed score."""
    if not settings.features.enable_metrics:
        return
    match_scores_total.labels(steam_strategy=steam_strategy, availability_hint=availability_hint).inc()
    match_final_score.labels(steam_strategy=steam_strategy).observe(final_score)
    match_scoring_duration_seconds.observe(duration)


def record_batch(candidates: int, skipped: int = 0) -> None:
    """Record batch scoring metrics."""
    if not settings.features.enable_metrics:
        return
    batch_candidates.observe(candidates)
    if skipped:
        batch_skipped_total.inc(skipped)


def get_metrics() -> str:
    """Get Prometheus metrics in text format."""
    return generate_latest(registry).decode('utf-8')


def get_metrics_content_type() -> str:
    """Get Prometheus metrics content type."""
    return CONTENT_TYPE_LATEST
