"""Unit tests for poolup_engine.achievements."""

from dataclasses import fields, replace

import pytest

from poolup_engine.achievements import (
    REQUIREMENT_FIELDS,
    Achievement,
    AchievementCatalog,
    AchievementEngine,
    ActivityCounters,
    Rarity,
    RequirementType,
)


def _badge(badge_id, requirement_type, value, rarity=Rarity.COMMON, category='test'):
    return Achievement(
        id=badge_id,
        name=badge_id.replace('_', ' ').title(),
        rarity=rarity,
        category=category,
        requirement_type=requirement_type,
        requirement_value=value,
    )


@pytest.fixture
def small_engine():
    catalog = AchievementCatalog([
        _badge('one_friend', RequirementType.FRIENDS_INVITED, 1),
        _badge('saved_100', RequirementType.TOTAL_SAVED, 10000),
        _badge('three_friends', RequirementType.FRIENDS_INVITED, 3, Rarity.RARE),
        _badge('two_pools', RequirementType.POOLS_CREATED, 2),
    ])
    return AchievementEngine(catalog)


def test_savings_thresholds_in_default_catalog():
    engine = AchievementEngine.default()
    statuses = {s.achievement.id: s for s in engine.evaluate(ActivityCounters(total_saved_cents=100000))}

    four_digit = statuses['four_digit_club']
    assert four_digit.earned
    assert four_digit.percentage == 100

    momentum = statuses['momentum_maker']
    assert not momentum.earned
    assert momentum.percentage == 40
    assert momentum.current == 100000
    assert momentum.required == 250000


def test_default_catalog_shape():
    catalog = AchievementEngine.default().catalog
    assert len(catalog) == 19
    assert catalog.entries[0].id == 'pool_buddy'
    assert {a.requirement_type for a in catalog} == set(RequirementType)
    assert len(catalog.by_category('savings')) == 7
    assert [a.id for a in catalog.by_rarity('legendary')] == ['super_connector', 'goal_getter', 'money_master']


def test_evaluate_keeps_catalog_order(small_engine):
    statuses = small_engine.evaluate(ActivityCounters(friends_invited=3))
    assert [s.achievement.id for s in statuses] == ['one_friend', 'saved_100', 'three_friends', 'two_pools']
    assert [s.earned for s in statuses] == [True, False, True, False]


def test_shared_requirement_types_are_independent(small_engine):
    statuses = {s.achievement.id: s for s in small_engine.evaluate(ActivityCounters(friends_invited=2))}
    assert statuses['one_friend'].earned
    assert not statuses['three_friends'].earned
    assert statuses['three_friends'].percentage == pytest.approx(200 / 3)


def test_progress_for_single_achievement(small_engine):
    badge = small_engine.catalog.get('two_pools')
    progress = small_engine.progress(badge, ActivityCounters(pools_created=1))

    assert progress.current == 1
    assert progress.required == 2
    assert progress.percentage == 50
    assert progress.remaining == 1


def test_progress_caps_at_100(small_engine):
    badge = small_engine.catalog.get('one_friend')
    assert small_engine.progress(badge, ActivityCounters(friends_invited=40)).percentage == 100


def test_negative_counters_do_not_raise(small_engine):
    statuses = small_engine.evaluate(ActivityCounters(friends_invited=-5, total_saved_cents=-1))
    assert not any(s.earned for s in statuses)
    assert all(s.percentage == 0 for s in statuses)
    assert statuses[0].current == -5


def test_diff_newly_earned_in_catalog_order(small_engine):
    previous = ActivityCounters(friends_invited=1)
    current = ActivityCounters(friends_invited=5, pools_created=2, total_saved_cents=20000)

    newly = small_engine.diff_newly_earned(previous, current)
    assert [a.id for a in newly] == ['saved_100', 'three_friends', 'two_pools']


def test_diff_of_identical_snapshots_is_empty():
    engine = AchievementEngine.default()
    counters = ActivityCounters(3, 4, 300000, 12, 600000)
    assert engine.diff_newly_earned(counters, counters) == []
    assert engine.diff_newly_earned(ActivityCounters(), ActivityCounters()) == []


@pytest.mark.parametrize("field_name", list(REQUIREMENT_FIELDS.values()))
def test_evaluate_is_monotonic_per_counter(field_name):
    engine = AchievementEngine.default()
    base = ActivityCounters(2, 3, 40000, 5, 100000)
    before = engine.evaluate(base)

    for bump in (1, 10, 1000, 10**7):
        after = engine.evaluate(replace(base, **{field_name: getattr(base, field_name) + bump}))
        for old, new in zip(before, after):
            if REQUIREMENT_FIELDS[old.achievement.requirement_type] != field_name:
                assert old == new
                continue
            assert new.earned >= old.earned
            assert new.percentage >= old.percentage


def test_next_achievements(small_engine):
    upcoming = small_engine.next_achievements(ActivityCounters(friends_invited=1))
    assert [s.achievement.id for s in upcoming] == ['saved_100', 'three_friends', 'two_pools']
    assert upcoming[1].percentage == pytest.approx(100 / 3)


def test_next_achievements_skips_completed_types(small_engine):
    upcoming = small_engine.next_achievements(ActivityCounters(friends_invited=3, pools_created=2))
    assert [s.achievement.id for s in upcoming] == ['saved_100']


def test_with_catalog_swaps_without_mutation(small_engine):
    original = small_engine.catalog
    swapped = small_engine.with_catalog(AchievementCatalog([_badge('solo', RequirementType.GROUP_SIZE, 1)]))

    assert small_engine.catalog is original
    assert len(small_engine.list_achievements()) == 4
    assert [a.id for a in swapped.list_achievements()] == ['solo']


def test_catalog_rejects_bad_entries():
    with pytest.raises(ValueError):
        AchievementCatalog([
            _badge('dup', RequirementType.POOLS_CREATED, 1),
            _badge('dup', RequirementType.POOLS_CREATED, 2),
        ])
    with pytest.raises(ValueError):
        AchievementCatalog([_badge('free', RequirementType.POOLS_CREATED, 0)])
    with pytest.raises(ValueError):
        AchievementCatalog.from_config({'achievements': [{
            'id': 'streak', 'name': 'Streak', 'rarity': 'rare',
            'requirement_type': 'days_in_a_row', 'requirement_value': 7,
        }]})


def test_every_requirement_type_has_a_counter():
    counter_fields = {f.name for f in fields(ActivityCounters)}
    for requirement_type in RequirementType:
        assert REQUIREMENT_FIELDS[requirement_type] in counter_fields


def test_counters_from_mapping_parse_text():
    counters = ActivityCounters.from_mapping({'friends_invited': '3', 'total_saved_cents': '1,500', 'pools_created': ''})
    assert counters == ActivityCounters(friends_invited=3, total_saved_cents=1500)


def test_status_frame(small_engine):
    frame = small_engine.status_frame(ActivityCounters(friends_invited=1))
    assert list(frame['ID']) == ['one_friend', 'saved_100', 'three_friends', 'two_pools']
    assert frame.loc[frame['ID'] == 'one_friend', 'Earned'].item()
    assert frame.loc[frame['ID'] == 'saved_100', 'Requirement'].item() == 'Save $100'
