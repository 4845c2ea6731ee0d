"""
Tests for the Planner probe sequence.

Groups failures are fatal; plans/tasks failures are logged and the probe
still reports success.
"""

import pytest

from planner_integration.exceptions import ApiError
from planner_integration.probe import run_probe
from tests.fakes import FakePlannerClient, Record


class TestRunProbe:
    """Tests for run_probe."""

    @pytest.mark.asyncio
    async def test_zero_groups_stops_after_groups(self, log_messages):
        client = FakePlannerClient()

        assert await run_probe(client) is True

        assert client.calls == [("list_groups",)]
        assert "✅ Found 0 groups" in log_messages

    @pytest.mark.asyncio
    async def test_full_walk_uses_first_ids(self, log_messages):
        client = FakePlannerClient(
            groups=[Record("g1"), Record("g2")],
            plans=[Record("p1"), Record("p2")],
            tasks=[Record("t1"), Record("t2"), Record("t3")],
        )

        assert await run_probe(client) is True

        assert client.calls == [
            ("list_groups",),
            ("list_plans", "g1"),
            ("list_tasks", "p1"),
        ]
        assert "✅ Found 2 groups" in log_messages
        assert "✅ Found 2 plans in group" in log_messages
        assert "✅ Found 3 tasks in plan" in log_messages

    @pytest.mark.asyncio
    async def test_zero_plans_skips_tasks(self):
        client = FakePlannerClient(groups=[Record("g1")])

        assert await run_probe(client) is True

        assert ("list_tasks", "p1") not in client.calls
        assert len(client.calls) == 2

    @pytest.mark.asyncio
    async def test_groups_failure_propagates(self):
        """A groups failure is fatal and no further calls are made."""
        client = FakePlannerClient(groups_error=ApiError("GET /groups failed (401): expired", 401))

        with pytest.raises(ApiError, match="expired"):
            await run_probe(client)

        assert client.calls == [("list_groups",)]

    @pytest.mark.asyncio
    async def test_plans_failure_is_soft(self, log_messages):
        client = FakePlannerClient(
            groups=[Record("g1")],
            plans_error=ApiError("forbidden", 403),
        )

        assert await run_probe(client) is True

        assert "⚠️  Could not access plans: forbidden" in log_messages
        assert all(call[0] != "list_tasks" for call in client.calls)

    @pytest.mark.asyncio
    async def test_tasks_failure_is_soft(self, log_messages):
        client = FakePlannerClient(
            groups=[Record("g1")],
            plans=[Record("p1")],
            tasks_error=ApiError("not found", 404),
        )

        assert await run_probe(client) is True

        assert "⚠️  Could not access tasks: not found" in log_messages
