"""
Unit tests for the verification code store.

These tests cover:
- Code generation and issuance
- Re-issuance replacing the outstanding code
- Non-consuming and consuming checks
- Expiry: "expired" once, then "not_found"
- Concurrent consumption of the same code
- Revocation and the background purge
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from jobportal.modules.verification.store import (
    CheckReason,
    CodeStore,
    generate_code,
    normalize_identity,
)


class TestGenerateCode:
    """Tests for code generation."""

    def test_code_is_six_digits(self):
        for _ in range(200):
            code = generate_code()
            assert len(code) == 6
            assert code.isdigit()
            assert 100000 <= int(code) <= 999999

    def test_normalize_identity_lowercases_and_strips(self):
        assert normalize_identity("  A@X.com ") == "a@x.com"


class TestIssue:
    """Tests for CodeStore.issue."""

    def test_issue_sets_expiry_from_ttl(self, store, clock):
        record = store.issue("a@x.com")

        assert record.identity == "a@x.com"
        assert record.issued_at == clock.now
        assert record.expires_at == clock.now + timedelta(minutes=10)
        assert len(store) == 1

    def test_reissue_invalidates_previous_code(self, clock):
        codes = iter(["111111", "222222"])
        store = CodeStore(ttl=timedelta(minutes=10), clock=clock, code_factory=lambda: next(codes))

        old = store.issue("a@x.com")
        new = store.issue("a@x.com")

        assert len(store) == 1
        result = store.peek("a@x.com", old.code)
        assert result.valid is False
        assert result.reason == CheckReason.MISMATCH
        assert store.peek("a@x.com", new.code).valid is True

    def test_identity_is_case_insensitive(self, store):
        record = store.issue("A@X.com")

        assert store.consume("a@x.COM", record.code).valid is True

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValueError):
            CodeStore(ttl=timedelta(0))


class TestPeek:
    """Tests for the non-consuming check."""

    def test_peek_does_not_consume(self, store):
        record = store.issue("a@x.com")

        assert store.peek("a@x.com", record.code).valid is True
        assert store.peek("a@x.com", record.code).valid is True
        assert len(store) == 1

    def test_peek_unknown_identity_is_not_found(self, store):
        result = store.peek("nobody@x.com", "123456")

        assert result.valid is False
        assert result.reason == CheckReason.NOT_FOUND

    def test_non_ascii_code_is_mismatch(self, store):
        store.issue("a@x.com")

        result = store.peek("a@x.com", "١٢٣٤٥٦")

        assert result.reason == CheckReason.MISMATCH


class TestConsume:
    """Tests for the consuming check."""

    def test_consume_is_single_use(self, store):
        record = store.issue("a@x.com")

        first = store.consume("a@x.com", record.code)
        second = store.consume("a@x.com", record.code)

        assert first.valid is True
        assert second.valid is False
        assert second.reason == CheckReason.NOT_FOUND

    def test_wrong_code_leaves_record_usable(self, store):
        record = store.issue("a@x.com")
        wrong = "000000" if record.code != "000000" else "999999"

        assert store.consume("a@x.com", wrong).reason == CheckReason.MISMATCH
        assert store.consume("a@x.com", record.code).valid is True


class TestExpiry:
    """Tests for TTL handling."""

    def test_valid_until_expiry_instant(self, store, clock):
        record = store.issue("a@x.com")
        clock.advance(minutes=10)

        assert store.peek("a@x.com", record.code).valid is True

    def test_expired_then_not_found(self, store, clock):
        record = store.issue("a@x.com")
        clock.advance(minutes=10, seconds=1)

        first = store.peek("a@x.com", record.code)
        second = store.peek("a@x.com", record.code)

        assert first.reason == CheckReason.EXPIRED
        assert second.reason == CheckReason.NOT_FOUND
        assert len(store) == 0

    def test_expired_reported_even_for_wrong_code(self, store, clock):
        store.issue("a@x.com")
        clock.advance(minutes=11)

        assert store.consume("a@x.com", "000000").reason == CheckReason.EXPIRED


class TestConcurrentConsume:
    """Concurrent consumers of the same code."""

    def test_exactly_one_consumer_succeeds(self, store):
        record = store.issue("a@x.com")
        workers = 32
        barrier = threading.Barrier(workers)

        def attempt(_):
            barrier.wait()
            return store.consume("a@x.com", record.code)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(attempt, range(workers)))

        successes = [r for r in results if r.valid]
        failures = [r for r in results if not r.valid]
        assert len(successes) == 1
        assert all(r.reason == CheckReason.NOT_FOUND for r in failures)


class TestDiscard:
    """Tests for revoking a code."""

    def test_discard_matching_code(self, store):
        record = store.issue("a@x.com")

        assert store.discard("a@x.com", record.code) is True
        assert store.peek("a@x.com", record.code).reason == CheckReason.NOT_FOUND

    def test_discard_ignores_newer_code(self, clock):
        codes = iter(["111111", "222222"])
        store = CodeStore(ttl=timedelta(minutes=10), clock=clock, code_factory=lambda: next(codes))
        old = store.issue("a@x.com")
        new = store.issue("a@x.com")

        assert store.discard("a@x.com", old.code) is False
        assert store.peek("a@x.com", new.code).valid is True


class TestPurgeExpired:
    """Tests for the background sweep."""

    def test_purge_respects_grace(self, store, clock):
        store.issue("old@x.com")
        clock.advance(minutes=5)
        store.issue("new@x.com")
        clock.advance(minutes=30)  # old expired 25m ago, new expired 20m ago

        removed = store.purge_expired(grace=timedelta(minutes=22))

        assert removed == 1
        assert store.peek("new@x.com", "000000").reason == CheckReason.EXPIRED

    def test_purge_keeps_live_codes(self, store):
        record = store.issue("a@x.com")

        assert store.purge_expired() == 0
        assert store.peek("a@x.com", record.code).valid is True
