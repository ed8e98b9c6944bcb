"""Tests for repeating APScheduler tasks."""

import asyncio

import pytest

from ride_analytics.services.scheduler import RepeatingTask


class TestRepeatingTask:
    """Tests for RepeatingTask lifecycle."""

    def test_not_running_initially(self):
        task = RepeatingTask("idle", lambda: None, 1.0)
        assert not task.is_running
        assert task.scheduler is None

    def test_stop_without_start_is_noop(self):
        task = RepeatingTask("idle", lambda: None, 1.0)
        task.stop()
        task.stop()
        assert not task.is_running

    @pytest.mark.asyncio
    async def test_runs_on_interval(self):
        runs = []

        async def job():
            runs.append(1)

        task = RepeatingTask("counter", job, 0.02)
        task.start()
        try:
            await asyncio.sleep(0.2)
        finally:
            task.stop()

        assert len(runs) >= 2

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self):
        task = RepeatingTask("once", lambda: None, 10.0)
        task.start()
        scheduler = task.scheduler
        task.start()

        assert task.scheduler is scheduler
        assert len(scheduler.get_jobs()) == 1
        task.stop()

    @pytest.mark.asyncio
    async def test_stop_then_restart(self):
        task = RepeatingTask("restart", lambda: None, 10.0)
        task.start()
        task.stop()
        assert not task.is_running

        task.start()
        assert task.is_running
        task.stop()

    @pytest.mark.asyncio
    async def test_no_runs_after_stop(self):
        runs = []

        async def job():
            runs.append(1)

        task = RepeatingTask("stopped", job, 0.02)
        task.start()
        task.stop()
        await asyncio.sleep(0.1)

        assert runs == []

    def test_stop_soon_without_start_is_noop(self):
        task = RepeatingTask("idle", lambda: None, 1.0)
        task.stop_soon()
        assert not task.is_running

    @pytest.mark.asyncio
    async def test_stop_soon_waits_for_current_run(self):
        task = RepeatingTask("deferred", lambda: None, 10.0)
        task.start()

        task.stop_soon()
        assert task.is_running

        await asyncio.sleep(0)
        assert not task.is_running

    @pytest.mark.asyncio
    async def test_stop_soon_from_inside_job(self):
        runs = []
        task = None

        async def job():
            runs.append(1)
            task.stop_soon()

        task = RepeatingTask("self-stopping", job, 0.02)
        task.start()
        await asyncio.sleep(0.2)

        assert runs == [1]
        assert not task.is_running
