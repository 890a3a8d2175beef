"""Overlap clustering - partitions events into transitively overlapping groups"""

from typing import Iterable

from .schemas import Event


def sort_key(event: Event):
    # Start ascending, longer jobs first so wide blocks anchor column 0, id keeps it total
    return (event.start, -event.duration_seconds, event.id)


def sort_events(events: Iterable[Event]) -> list[Event]:
    return sorted(events, key=sort_key)


def cluster_events(events: Iterable[Event]) -> list[list[Event]]:
    """
    Sweep the events in start order, keeping the running end of the open
    cluster. An event starting before that end joins the cluster, otherwise
    the cluster closes and a new one begins.

    Two members of a cluster need not overlap each other directly; they may
    be bridged by a third event.
    """
    clusters: list[list[Event]] = []
    current: list[Event] = []
    cluster_end = None

    for event in sort_events(events):
        if current and event.start < cluster_end:
            current.append(event)
            cluster_end = max(cluster_end, event.end)
        else:
            if current:
                clusters.append(current)
            current = [event]
            cluster_end = event.end

    if current:
        clusters.append(current)

    return clusters
