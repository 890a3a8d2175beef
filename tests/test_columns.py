import random
from datetime import datetime, timedelta

from app.domain.scheduling.clustering import cluster_events
from app.domain.scheduling.columns import assign_columns, max_overlap
from app.domain.scheduling.schemas import Event

BASE = datetime(2025, 10, 13, 7, 0)


def ev(event_id, start_min, end_min):
    return Event(
        id=event_id,
        start=BASE + timedelta(minutes=start_min),
        end=BASE + timedelta(minutes=end_min),
    )


def columns_by_id(cluster):
    return {a.event.id: (a.column, a.total_columns) for a in assign_columns(cluster)}


def test_single_event_fills_the_lane():
    assert columns_by_id([ev("a", 0, 60)]) == {"a": (0, 1)}


def test_three_way_overlap_uses_three_columns():
    events = [ev("a", 0, 120), ev("b", 30, 90), ev("c", 60, 150)]
    assert columns_by_id(events) == {"a": (0, 3), "b": (1, 3), "c": (2, 3)}


def test_freed_column_is_reused():
    # A 9-11, B 10-12, C 11-12: C slots back into A's column
    events = [ev("A", 120, 240), ev("B", 180, 300), ev("C", 240, 300)]
    assert columns_by_id(events) == {"A": (0, 2), "B": (1, 2), "C": (0, 2)}


def test_total_columns_is_uniform_across_cluster():
    events = [ev("a", 0, 60), ev("b", 30, 120), ev("c", 90, 150), ev("d", 100, 110)]
    totals = {a.total_columns for a in assign_columns(events)}
    assert totals == {3}


def test_max_overlap_ignores_touching_events():
    assert max_overlap([ev("a", 0, 60), ev("b", 60, 120)]) == 1
    assert max_overlap([]) == 0


def test_random_clusters_never_collide_and_use_minimal_columns():
    rng = random.Random(4242)
    for _ in range(100):
        events = []
        for i in range(rng.randint(1, 30)):
            start = rng.randint(0, 660) // 15 * 15
            events.append(ev(f"e{i}", start, start + rng.choice([15, 30, 60, 90, 120, 150])))

        for cluster in cluster_events(events):
            assignments = assign_columns(cluster)
            assert len(assignments) == len(cluster)

            # no two overlapping events share a column
            for i, first in enumerate(assignments):
                for second in assignments[i + 1 :]:
                    if first.column == second.column:
                        assert not first.event.overlaps(second.event)

            # column count equals the peak number of simultaneous events
            total = assignments[0].total_columns
            assert total == max_overlap(cluster)
            assert all(0 <= a.column < total for a in assignments)
