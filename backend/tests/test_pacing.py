"""Tests for per-kind request pacing."""

import asyncio

import pytest

from spendwise.client.pacing import OperationKind, PacingPolicy


class FakeClock:
    """Manual clock whose sleep just advances time."""

    def __init__(self):
        self.now = 100.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(round(seconds, 6))
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def policy(clock):
    return PacingPolicy(
        intervals={OperationKind.list: 0.05, OperationKind.stats: 0.1},
        default_interval=0.0,
        clock=clock,
        sleep=clock.sleep,
    )


class TestPacingPolicy:
    """Test minimum spacing between sends."""

    def test_first_send_is_immediate(self, policy, clock):
        """Nothing to wait for on the first send."""
        asyncio.run(policy.before_send(OperationKind.stats))
        assert clock.sleeps == []

    def test_back_to_back_waits_full_interval(self, policy, clock):
        """An immediate second send waits the whole interval."""
        async def run():
            await policy.before_send(OperationKind.stats)
            await policy.before_send(OperationKind.stats)

        asyncio.run(run())
        assert clock.sleeps == [0.1]

    def test_waits_only_remaining_time(self, policy, clock):
        """Time already elapsed counts towards the interval."""
        async def run():
            await policy.before_send(OperationKind.stats)
            clock.now += 0.03
            await policy.before_send(OperationKind.stats)

        asyncio.run(run())
        assert clock.sleeps == [0.07]

    def test_no_wait_after_interval(self, policy, clock):
        """Enough elapsed time means no sleep."""
        async def run():
            await policy.before_send(OperationKind.list)
            clock.now += 1
            await policy.before_send(OperationKind.list)

        asyncio.run(run())
        assert clock.sleeps == []

    def test_kinds_are_independent(self, policy, clock):
        """Sending one kind doesn't delay another."""
        async def run():
            await policy.before_send(OperationKind.list)
            await policy.before_send(OperationKind.stats)
            await policy.before_send(OperationKind.list)

        asyncio.run(run())
        assert clock.sleeps == [0.05]

    def test_default_interval(self, clock):
        """Kinds without their own interval use the default."""
        policy = PacingPolicy(default_interval=0.2, clock=clock, sleep=clock.sleep)

        async def run():
            await policy.before_send("mutation")
            await policy.before_send("mutation")

        asyncio.run(run())
        assert policy.interval(OperationKind.mutation) == 0.2
        assert clock.sleeps == [0.2]

    def test_unknown_kind_rejected(self, policy):
        """Kinds must be OperationKind values."""
        with pytest.raises(ValueError):
            policy.interval("bogus")

    def test_from_settings(self):
        """Settings provide the per-kind intervals."""
        policy = PacingPolicy.from_settings()
        assert policy.interval(OperationKind.list) == 0.05
        assert policy.interval(OperationKind.stats) == 0.1
        assert policy.interval(OperationKind.budget) == 0.1
        assert policy.interval(OperationKind.mutation) == 0.05
        assert policy.interval(OperationKind.fetch) == 0.0
