from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True, slots=True)
class OperatingHours:
    """A daily opening window and the rule for "open at time of day t".

    - open_time <= close_time: open when open_time <= t <= close_time
    - open_time > close_time: the window runs past midnight, so open when
      t >= open_time or t <= close_time

    Both bounds are inclusive: a location closing at 18:00 is open at 18:00.
    Location availability and the opening-hours policy both go through here.
    """

    open_time: time
    close_time: time

    @property
    def wraps_midnight(self) -> bool:
        return self.open_time > self.close_time

    def contains(self, time_of_day: time) -> bool:
        if self.wraps_midnight:
            return time_of_day >= self.open_time or time_of_day <= self.close_time
        return self.open_time <= time_of_day <= self.close_time

    @staticmethod
    def sqlalchemy_open_predicate(*, open_col, close_col, time_of_day: time):
        """Build a SQLAlchemy predicate implementing ``contains`` over columns.

        The window comes from the row (``open_col``/``close_col``) while the time
        of day is a bound value, so repositories can filter "open now" without
        redefining the wrap-around rule.
        """
        from sqlalchemy import and_, or_

        return or_(
            and_(
                open_col <= close_col,
                open_col <= time_of_day,
                close_col >= time_of_day,
            ),
            and_(
                open_col > close_col,
                or_(open_col <= time_of_day, close_col >= time_of_day),
            ),
        )
