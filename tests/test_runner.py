"""Estimate runner tests: inline computation and last-write-wins background runs."""

import threading

from estimator.runner import EstimateRunner, compute_estimate


def test_compute_estimate_bundles_every_projection(default_config):
    estimate = compute_estimate(default_config, sequence=7)

    assert estimate.sequence == 7
    assert estimate.costs.encoding > 0
    assert estimate.revenue.net_operating_profit == estimate.revenue.total_revenue - (
        estimate.costs.encoding + estimate.costs.storage + estimate.costs.delivery + estimate.costs.other)
    assert estimate.hardware.recommended_hardware
    assert estimate.has_errors is False


def test_estimate_flags_validation_errors(default_config):
    assert compute_estimate(default_config.replace(channel_count=0)).has_errors is True


def test_latest_submission_wins(default_config):
    with EstimateRunner() as runner:
        runner.submit(default_config.replace(channel_count=1))
        runner.submit(default_config.replace(channel_count=2))
        last = runner.submit(default_config.replace(channel_count=3))
        estimate = runner.wait(timeout=10)

    assert last == 3
    assert estimate.sequence == 3
    assert estimate.costs.encoding == compute_estimate(default_config.replace(channel_count=3)).costs.encoding


def test_callback_receives_accepted_results(default_config):
    received = []
    done = threading.Event()

    def on_result(estimate):
        received.append(estimate.sequence)
        done.set()

    with EstimateRunner(on_result=on_result) as runner:
        runner.submit(default_config)
        assert done.wait(timeout=10)

    assert received == [1]


def test_failed_calculation_keeps_previous_result(default_config):
    with EstimateRunner() as runner:
        runner.submit(default_config)
        first = runner.wait(timeout=10)
        runner.submit(None)
        after_failure = runner.wait(timeout=10)

    assert first is not None
    assert after_failure is first
    assert runner.sequence == 2


def test_latest_is_none_before_first_result():
    runner = EstimateRunner()
    try:
        assert runner.latest() is None
        assert runner.wait(timeout=0) is None
    finally:
        runner.shutdown()
