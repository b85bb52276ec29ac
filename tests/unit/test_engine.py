"""Unit tests for the achievement engine (fishflow/gamification/engine.py)"""
import pytest
import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

from fishflow.exceptions import ValidationError
from fishflow.gamification.catalog import load_catalog
from fishflow.gamification.engine import AchievementEngine
from fishflow.models.achievement import AchievementTier, AchievementTrigger, UserAchievement
from tests.factories import make_catch, make_skunk

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def species_catches(count):
    """One catch of each of `count` distinct species, all on different days"""
    return [make_catch(fish_id=f"species-{i}", day=i * 2) for i in range(count)]


@pytest.fixture
def clocked_engine(memory_store, notification_queue):
    return AchievementEngine(
        store=memory_store,
        catch_log=memory_store,
        notification_queue=notification_queue,
        clock=lambda: FIXED_NOW,
    )


# ============================================================================
# Trigger Dispatcher Tests
# ============================================================================

@pytest.mark.asyncio
async def test_empty_log_creates_locked_records(engine, memory_store):
    """Test the first pass creates one locked record per achievement"""
    unlocks = await engine.evaluate("login")

    assert unlocks == []
    records = await memory_store.get_user_achievements()
    assert len(records) == len(engine.catalog)
    assert all(r.tier is None and r.progress == 0 for r in records)


@pytest.mark.asyncio
async def test_first_catch_unlocks_in_catalog_order(engine, memory_store, recording_notifier):
    """Test one catch unlocks first-catch straight to gold (all thresholds are 1)"""
    catch = make_catch()
    memory_store.add_catch(catch)

    unlocks = await engine.check_after_catch(catch)
    await engine.notification_queue.wait_until_idle()

    ids = [u.achievement_id for u in unlocks]
    assert ids[0] == "first-catch"
    assert unlocks[0].tier == AchievementTier.GOLD
    # Order follows the catalog
    catalog_ids = [a.id for a in engine.catalog]
    assert ids == [i for i in catalog_ids if i in ids]
    assert [c[0] for c in recording_notifier.calls] == ids


@pytest.mark.asyncio
async def test_every_trigger_evaluates_everything(engine, memory_store):
    """Test equipment and login triggers also pick up catch-based progress"""
    memory_store.add_catch(make_catch())

    unlocks = await engine.check_after_equipment_change({"rod": "new rod"})

    assert "first-catch" in [u.achievement_id for u in unlocks]


@pytest.mark.asyncio
async def test_unknown_trigger_rejected(engine, memory_store):
    """Test a bad trigger is reported to the caller before any data is touched"""
    with patch.object(memory_store, "get_catches", AsyncMock()) as get_catches:
        with pytest.raises(ValidationError) as exc_info:
            await engine.evaluate("sunrise")

    assert exc_info.value.field == "trigger"
    get_catches.assert_not_awaited()
    assert await memory_store.get_user_achievements() == []


@pytest.mark.asyncio
async def test_trigger_enum_accepted(engine):
    assert await engine.evaluate(AchievementTrigger.EQUIPMENT) == []


# ============================================================================
# Unlock Detection Tests
# ============================================================================

@pytest.mark.asyncio
async def test_threshold_inclusive_bronze(clocked_engine, memory_store):
    """Test exactly 5 species resolves species-collector to bronze"""
    for c in species_catches(5):
        memory_store.add_catch(c)

    unlocks = await clocked_engine.manual_check()

    species = next(u for u in unlocks if u.achievement_id == "species-collector")
    assert species.tier == AchievementTier.BRONZE
    record = await memory_store.get_user_achievement("species-collector")
    assert record.progress == 5
    assert record.tier == AchievementTier.BRONZE
    assert record.unlocked_at == FIXED_NOW
    assert record.is_viewed is False


@pytest.mark.asyncio
async def test_first_unlock_metadata(engine, memory_store):
    """Test null -> bronze is new, not an upgrade"""
    for c in species_catches(5):
        memory_store.add_catch(c)

    unlocks = await engine.check_on_login()

    species = next(u for u in unlocks if u.achievement_id == "species-collector")
    assert species.is_new is True
    assert species.is_upgrade is False
    assert species.previous_tier is None


@pytest.mark.asyncio
async def test_upgrade_metadata_and_first_unlock_time_kept(clocked_engine, memory_store):
    """Test bronze -> gold is an upgrade and keeps the first unlock time"""
    first_unlock = datetime(2024, 1, 1, tzinfo=timezone.utc)
    await memory_store.upsert_user_achievement(UserAchievement(
        achievement_id="species-collector",
        progress=5,
        tier=AchievementTier.BRONZE,
        unlocked_at=first_unlock,
        is_viewed=True,
    ))
    for c in species_catches(30):
        memory_store.add_catch(c)

    unlocks = await clocked_engine.evaluate("catch")

    species = next(u for u in unlocks if u.achievement_id == "species-collector")
    assert species.tier == AchievementTier.GOLD
    assert species.is_new is False
    assert species.is_upgrade is True
    assert species.previous_tier == AchievementTier.BRONZE

    record = await memory_store.get_user_achievement("species-collector")
    assert record.tier == AchievementTier.GOLD
    assert record.progress == 30
    assert record.unlocked_at == first_unlock
    assert record.is_viewed is False


@pytest.mark.asyncio
async def test_same_or_lower_tier_never_unlocks(engine, memory_store):
    """Test a stored tier at or above the eligible one emits nothing"""
    await memory_store.upsert_user_achievement(UserAchievement(
        achievement_id="species-collector",
        progress=30,
        tier=AchievementTier.GOLD,
        unlocked_at=FIXED_NOW,
        is_viewed=True,
    ))
    for c in species_catches(5):
        memory_store.add_catch(c)

    unlocks = await engine.evaluate("login")

    assert "species-collector" not in [u.achievement_id for u in unlocks]
    record = await memory_store.get_user_achievement("species-collector")
    # Progress follows the log, tier stays where it was
    assert record.progress == 5
    assert record.tier == AchievementTier.GOLD
    assert record.unlocked_at == FIXED_NOW
    assert record.is_viewed is True


@pytest.mark.asyncio
async def test_silent_progress_update(engine, memory_store):
    """Test progress below the next tier is saved without an unlock"""
    for c in species_catches(5):
        memory_store.add_catch(c)
    await engine.evaluate("login")
    await engine.mark_as_viewed("species-collector")

    memory_store.add_catch(make_catch(fish_id="species-extra", day=40))
    unlocks = await engine.evaluate("catch")

    assert "species-collector" not in [u.achievement_id for u in unlocks]
    record = await memory_store.get_user_achievement("species-collector")
    assert record.progress == 6
    assert record.tier == AchievementTier.BRONZE
    assert record.is_viewed is True


@pytest.mark.asyncio
async def test_second_pass_is_idempotent(engine, memory_store):
    """Test an unchanged log gives no unlocks and no writes"""
    for c in species_catches(6) + [make_skunk(day=30), make_skunk(day=31), make_skunk(day=32)]:
        memory_store.add_catch(c)

    first = await engine.evaluate("login")
    assert first

    with patch.object(memory_store, "upsert_user_achievement", AsyncMock()) as upsert:
        second = await engine.evaluate("login")

    assert second == []
    upsert.assert_not_awaited()


@pytest.mark.asyncio
async def test_deleted_catches_do_not_relock(engine, memory_store):
    """Test tiers stay once unlocked even if the log shrinks"""
    catch = make_catch()
    memory_store.add_catch(catch)
    await engine.evaluate("catch")

    memory_store.remove_catch(catch.id)
    unlocks = await engine.evaluate("login")

    assert unlocks == []
    record = await memory_store.get_user_achievement("first-catch")
    assert record.progress == 0
    assert record.tier == AchievementTier.GOLD


# ============================================================================
# Error Handling Tests
# ============================================================================

@pytest.mark.asyncio
async def test_persistence_failure_skips_only_that_achievement(engine, memory_store):
    """Test a failing write is logged, not emitted, and the pass continues"""
    memory_store.add_catch(make_catch(measurements={"weight_kg": 2.0}))
    original_upsert = memory_store.upsert_user_achievement

    async def flaky_upsert(record):
        if record.achievement_id == "first-catch":
            raise RuntimeError("disk full")
        await original_upsert(record)

    with patch.object(memory_store, "upsert_user_achievement", side_effect=flaky_upsert):
        unlocks = await engine.evaluate("catch")

    ids = [u.achievement_id for u in unlocks]
    assert "first-catch" not in ids
    assert "size-hunter" in ids
    assert await memory_store.get_user_achievement("first-catch") is None

    # Next pass retries naturally
    unlocks = await engine.evaluate("login")
    assert [u.achievement_id for u in unlocks] == ["first-catch"]


@pytest.mark.asyncio
async def test_load_failure_returns_no_unlocks(engine, memory_store):
    """Test an unreadable catch log degrades to an empty pass"""
    with patch.object(memory_store, "get_catches", AsyncMock(side_effect=RuntimeError("locked"))):
        assert await engine.evaluate("login") == []


@pytest.mark.asyncio
async def test_failing_strategy_is_skipped(memory_store, notification_queue):
    """Test a strategy that raises leaves its record untouched"""
    def broken(catches, context):
        raise ZeroDivisionError

    engine = AchievementEngine(
        store=memory_store,
        catch_log=memory_store,
        notification_queue=notification_queue,
        strategies={"first-catch": broken},
    )
    memory_store.add_catch(make_catch())

    await engine.evaluate("login")

    assert await memory_store.get_user_achievement("first-catch") is None
    # Achievements without a strategy score 0 but still get a record
    assert (await memory_store.get_user_achievement("explorer")).progress == 0


# ============================================================================
# View-State Tracker Tests
# ============================================================================

@pytest.mark.asyncio
async def test_mark_as_viewed_isolated(engine, memory_store):
    """Test marking one achievement leaves others untouched"""
    memory_store.add_catch(make_catch(measurements={"weight_kg": 1.5}))
    await engine.evaluate("catch")
    before = await memory_store.get_user_achievement("first-catch")

    assert await engine.mark_as_viewed("first-catch") is True

    viewed = await memory_store.get_user_achievement("first-catch")
    other = await memory_store.get_user_achievement("size-hunter")
    assert viewed.is_viewed is True
    assert viewed.progress == before.progress
    assert viewed.tier == before.tier
    assert viewed.unlocked_at == before.unlocked_at
    assert other.is_viewed is False


@pytest.mark.asyncio
async def test_mark_as_viewed_missing_record(engine):
    assert await engine.mark_as_viewed("explorer") is False


@pytest.mark.asyncio
async def test_mark_as_viewed_write_failure(engine, memory_store):
    await memory_store.upsert_user_achievement(UserAchievement(achievement_id="explorer"))

    with patch.object(memory_store, "upsert_user_achievement", AsyncMock(side_effect=RuntimeError("boom"))):
        assert await engine.mark_as_viewed("explorer") is False


@pytest.mark.asyncio
async def test_upgrade_resets_viewed_flag(engine, memory_store):
    """Test a new tier brings the NEW badge back"""
    for c in species_catches(5):
        memory_store.add_catch(c)
    await engine.evaluate("login")
    await engine.mark_as_viewed("species-collector")

    for c in species_catches(15):
        memory_store.add_catch(c)
    await engine.evaluate("catch")

    record = await memory_store.get_user_achievement("species-collector")
    assert record.tier == AchievementTier.SILVER
    assert record.is_viewed is False


# ============================================================================
# Concurrency Tests
# ============================================================================

@pytest.mark.asyncio
async def test_overlapping_triggers_unlock_once(engine, memory_store):
    """Test concurrent passes are serialized so an unlock is reported once"""
    memory_store.add_catch(make_catch())

    results = await asyncio.gather(engine.evaluate("catch"), engine.evaluate("login"))

    unlocked = [u.achievement_id for unlocks in results for u in unlocks]
    assert unlocked.count("first-catch") == 1


@pytest.mark.asyncio
async def test_custom_catalog(memory_store, notification_queue):
    """Test the engine evaluates only the catalog it was given"""
    catalog = [a for a in load_catalog() if a.id == "explorer"]
    engine = AchievementEngine(
        store=memory_store,
        catch_log=memory_store,
        notification_queue=notification_queue,
        catalog=catalog,
    )
    memory_store.add_catch(make_catch(location={"water_type": "lake"}))
    memory_store.add_catch(make_catch(location={"water_type": "ocean"}))

    unlocks = await engine.evaluate("catch")

    assert [(u.achievement_id, u.tier) for u in unlocks] == [("explorer", AchievementTier.BRONZE)]
    assert len(await memory_store.get_user_achievements()) == 1
