"""Tests for the diagnostic tracer."""

from __future__ import annotations

import logging

from dynamo_readonly.core import tracing


class _Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("cannot render")


def test_emits_structured_event(caplog):
    with caplog.at_level(logging.INFO, logger="dynamo_readonly.trace"):
        tracing.trace(tracing.PAGE_DRAINED, "paginate-query-table", page=2, item_count=10)
    assert 'page.drained op=paginate-query-table {"item_count": 10, "page": 2}' in caplog.text


def test_errors_logged_at_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="dynamo_readonly.trace"):
        tracing.trace(tracing.RESPONSE_RECEIVED, "scan-table", item_count=1)
        tracing.trace(tracing.ERROR_RAISED, "scan-table", message="denied")
    assert [r.levelno for r in caplog.records] == [logging.WARNING]


def test_unrenderable_fields_drop_the_event(caplog):
    with caplog.at_level(logging.DEBUG, logger="dynamo_readonly.trace"):
        assert tracing.trace(tracing.REQUEST_BUILT, "scan-table", params=_Unprintable()) is None
    messages = [r.getMessage() for r in caplog.records]
    assert not any(m.startswith("request.built") for m in messages)
    assert messages == ["trace event dropped for op=scan-table stage=request.built"]
