from __future__ import annotations

from typing import Iterable

from commute_transit.domain.models import StopTime

DEFAULT_CURRENT_TIME = "08:00:00"
MAX_NEXT_DEPARTURES = 5


def format_time_12h(time: str) -> str:
    """Format a GTFS 'HH:MM:SS' string as a 12-hour clock ('1:30 PM').

    Minutes are copied as given. Hours past 23 follow the same rule
    (25:10:00 -> '13:10 PM'). A non-numeric hour returns the input unchanged.
    """

    parts = time.split(":")
    try:
        hour = int(parts[0])
    except ValueError:
        return time
    minutes = parts[1] if len(parts) > 1 else "00"

    ampm = "PM" if hour >= 12 else "AM"
    if hour > 12:
        display_hour = hour - 12
    elif hour == 0:
        display_hour = 12
    else:
        display_hour = hour
    return f"{display_hour}:{minutes} {ampm}"


def next_stop_times(
    stop_times: Iterable[StopTime],
    *,
    stop_id: str,
    current_time: str = DEFAULT_CURRENT_TIME,
    limit: int = MAX_NEXT_DEPARTURES,
) -> list[StopTime]:
    """Stop times at `stop_id` departing at or after `current_time`.

    Comparison is lexical on zero-padded HH:MM:SS, which matches chronological
    order within one service day. No wrap past midnight.
    """

    if limit <= 0:
        return []

    upcoming = [
        st
        for st in stop_times
        if st.stop_id == stop_id and st.departure_time >= current_time
    ]
    upcoming.sort(key=lambda st: st.departure_time)
    return upcoming[:limit]
