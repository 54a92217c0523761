"""Tests for cooperative cancellation tokens."""

from __future__ import annotations

import threading

import pytest

from panelnest.domain import CancellationCheck, CancellationToken


class TestCancellationToken:
    def test_not_cancelled_by_default(self) -> None:
        assert not CancellationToken().cancelled

    def test_cancel(self) -> None:
        token = CancellationToken()
        token.cancel()
        assert token.cancelled

    def test_zero_timeout_expires_immediately(self) -> None:
        assert CancellationToken.with_timeout(0).cancelled

    def test_long_timeout_not_expired(self) -> None:
        assert not CancellationToken.with_timeout(3600).cancelled

    def test_negative_timeout_rejected(self) -> None:
        with pytest.raises(ValueError):
            CancellationToken.with_timeout(-1)

    def test_cancel_visible_across_threads(self) -> None:
        token = CancellationToken()
        worker = threading.Thread(target=token.cancel)
        worker.start()
        worker.join()
        assert token.cancelled

    def test_satisfies_protocol(self) -> None:
        assert isinstance(CancellationToken(), CancellationCheck)
