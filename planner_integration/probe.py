"""
Planner API probe.

Walks groups -> plans -> tasks, following the first item at each level and
stopping at the first empty collection. A failure listing groups is fatal
and propagates to the caller. Failures listing plans or tasks are logged as
warnings and the probe still reports success.
"""

from typing import Protocol, Sequence

from loguru import logger

from planner_integration.exceptions import ApiError


class HasId(Protocol):
    """Minimal shape of a Graph record as seen by the probe."""

    id: str


class PlannerClient(Protocol):
    """The three list calls the probe depends on."""

    async def list_groups(self) -> Sequence[HasId]: ...

    async def list_plans(self, group_id: str) -> Sequence[HasId]: ...

    async def list_tasks(self, plan_id: str) -> Sequence[HasId]: ...


async def run_probe(client: PlannerClient) -> bool:
    """
    Exercise the Planner endpoints with the given client.

    Args:
        client: Graph client (or any object with the three list calls)

    Returns:
        True once the walk finishes, including soft failures on plans/tasks

    Raises:
        ApiError: If listing groups fails
    """
    logger.info("🧪 Testing Microsoft Planner API...")

    logger.info("📋 Testing: Get groups...")
    groups = await client.list_groups()
    logger.info(f"✅ Found {len(groups)} groups")

    if not groups:
        return True

    group_id = groups[0].id
    logger.info(f"📋 Testing: Get plans from group {group_id}...")
    try:
        plans = await client.list_plans(group_id)
    except ApiError as e:
        logger.warning(f"⚠️  Could not access plans: {e}")
        return True
    logger.info(f"✅ Found {len(plans)} plans in group")

    if not plans:
        return True

    plan_id = plans[0].id
    logger.info(f"📋 Testing: Get tasks from plan {plan_id}...")
    try:
        tasks = await client.list_tasks(plan_id)
    except ApiError as e:
        logger.warning(f"⚠️  Could not access tasks: {e}")
        return True
    logger.info(f"✅ Found {len(tasks)} tasks in plan")

    return True
