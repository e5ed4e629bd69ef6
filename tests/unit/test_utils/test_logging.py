"""Tests for structured logging helpers."""

import logging

import pytest

from src.utils.logging import (
    correlation_context,
    get_correlation_id,
    get_structured_logger,
    log_timing,
    mask_sensitive_data,
)


@pytest.mark.unit
def test_correlation_context_scopes_id():
    assert get_correlation_id() is None

    with correlation_context() as correlation_id:
        assert correlation_id.startswith("act_")
        assert get_correlation_id() == correlation_id
        with correlation_context("act_inner") as inner:
            assert get_correlation_id() == inner

        assert get_correlation_id() == correlation_id

    assert get_correlation_id() is None


@pytest.mark.unit
def test_mask_sensitive_data():
    masked = mask_sensitive_data("Seller jane@example.com on +254 712 345 678")

    assert "jane@example.com" not in masked
    assert "712 345" not in masked
    assert "[REDACTED_EMAIL]" in masked
    assert "[REDACTED_PHONE]" in masked


@pytest.mark.unit
def test_structured_logger_adds_fields(caplog):
    logger = get_structured_logger("tests.structured")

    with caplog.at_level(logging.INFO, logger="tests.structured"):
        with correlation_context("act_test"):
            logger.info("Plot loaded", plot_id=7)

    record = caplog.records[-1]
    assert record.plot_id == 7
    assert record.correlation_id == "act_test"


@pytest.mark.unit
def test_log_timing_records_duration(caplog):
    logger = get_structured_logger("tests.timing")

    with caplog.at_level(logging.INFO, logger="tests.timing"):
        with log_timing("search_plots", logger=logger, generation=1):
            pass

    record = caplog.records[-1]
    assert record.operation == "search_plots"
    assert record.processing_time_ms >= 0
