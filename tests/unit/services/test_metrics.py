from src.app.services.metrics import RequestMetrics


def test_counters_start_at_zero():
    metrics = RequestMetrics()

    assert metrics.get("limiter_rejected") == 0


def test_increment_and_snapshot():
    metrics = RequestMetrics()
    metrics.increment("total_requests_received")
    metrics.increment("total_requests_received")
    metrics.increment("edit_conflicts", 3)

    snapshot = metrics.snapshot()

    assert snapshot["total_requests_received"] == 2
    assert snapshot["edit_conflicts"] == 3


def test_record_response_groups_by_status():
    metrics = RequestMetrics()
    metrics.record_response(200, 150)
    metrics.record_response(200, 50)
    metrics.record_response(429, 10)

    snapshot = metrics.snapshot()

    assert snapshot["total_responses_sent"] == 3
    assert snapshot["total_processing_time_us"] == 210
    assert snapshot["responses_by_status"] == {"200": 2, "429": 1}
