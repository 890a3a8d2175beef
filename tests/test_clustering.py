import random
from datetime import datetime, timedelta

from app.domain.scheduling.clustering import cluster_events, sort_events
from app.domain.scheduling.schemas import Event

BASE = datetime(2025, 10, 13, 7, 0)


def ev(event_id, start_min, end_min, resource_id=""):
    return Event(
        id=event_id,
        resource_id=resource_id,
        start=BASE + timedelta(minutes=start_min),
        end=BASE + timedelta(minutes=end_min),
    )


def ids(clusters):
    return [[e.id for e in cluster] for cluster in clusters]


def test_empty_input_has_no_clusters():
    assert cluster_events([]) == []


def test_sort_prefers_earlier_then_longer_then_id():
    events = [ev("b", 60, 90), ev("a", 60, 90), ev("long", 60, 180), ev("first", 0, 30)]
    assert [e.id for e in sort_events(events)] == ["first", "long", "a", "b"]


def test_disjoint_events_stay_separate():
    events = [ev("a", 0, 60), ev("b", 120, 180), ev("c", 240, 300)]
    assert ids(cluster_events(events)) == [["a"], ["b"], ["c"]]


def test_back_to_back_events_do_not_cluster():
    events = [ev("a", 0, 60), ev("b", 60, 120)]
    assert ids(cluster_events(events)) == [["a"], ["b"]]


def test_bridged_events_share_a_cluster():
    # a and c never overlap but b bridges them
    events = [ev("a", 0, 60), ev("b", 30, 120), ev("c", 90, 150)]
    assert ids(cluster_events(events)) == [["a", "b", "c"]]


def test_nested_events_cluster():
    events = [ev("inner", 60, 90), ev("outer", 0, 240)]
    assert ids(cluster_events(events)) == [["outer", "inner"]]


def test_input_order_does_not_matter():
    events = [ev("a", 0, 60), ev("b", 30, 90), ev("c", 200, 260), ev("d", 210, 230)]
    shuffled = events[:]
    random.Random(7).shuffle(shuffled)
    assert ids(cluster_events(shuffled)) == ids(cluster_events(events))


def test_random_clusters_partition_and_separate():
    rng = random.Random(20251013)
    for _ in range(50):
        events = []
        for i in range(rng.randint(1, 25)):
            start = rng.randint(0, 600)
            events.append(ev(f"e{i}", start, start + rng.randint(5, 180)))

        clusters = cluster_events(events)

        # every event appears exactly once
        assert sorted(e.id for c in clusters for e in c) == sorted(e.id for e in events)

        # clusters are ordered and do not overlap each other
        for earlier, later in zip(clusters, clusters[1:]):
            assert max(e.end for e in earlier) <= min(e.start for e in later)

        # within a cluster each event after the first starts before the running end
        for cluster in clusters:
            running_end = cluster[0].end
            for event in cluster[1:]:
                assert event.start < running_end
                running_end = max(running_end, event.end)
