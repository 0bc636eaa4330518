# grokline/tsmod.py
import pandas as pd

NANOSECOND = 1
MICROSECOND = 1_000
MILLISECOND = 1_000_000
SECOND = 1_000_000_000

# after this many repeats the increment drops to the next finer unit
ROLLOVER_AT = 999


def increment_for(ts: pd.Timestamp) -> int:
    """
    Pick the nudge unit (in nanoseconds) for a repeated timestamp: one unit
    finer than the precision the value already carries.
    """
    sub = ts.value % SECOND
    if sub == 0:
        return MILLISECOND
    if sub % MILLISECOND == 0:
        return MICROSECOND
    return NANOSECOND


class TimestampModder:
    """
    Makes successive identical timestamps strictly increasing.

    Log formats with second or millisecond resolution often produce several
    lines with the same timestamp. Repeats are pushed forward by the smallest
    unit the source format does not express, so ms-precision input moves in
    µs steps and whole-second input in ms steps.

    Not thread-safe: keep one instance per parser.
    """

    def __init__(self):
        self.last: pd.Timestamp | None = None
        self.rep = 0
        self.incr = 0
        self.rollover = 0

    def reset(self) -> None:
        self.rep = 0
        self.incr = 0
        self.rollover = 0

    def tsmod(self, ts: pd.Timestamp | None) -> pd.Timestamp | None:
        if ts is None or self.last is None or ts != self.last:
            self.reset()
            self.last = ts
            return ts

        if self.incr == 0:
            self.incr = increment_for(ts)

        self.rep += 1
        if self.rep == ROLLOVER_AT and self.incr > NANOSECOND:
            self.rollover += self.incr * self.rep
            self.rep = 1
            self.incr //= 1000
        return ts + pd.Timedelta(self.incr * self.rep + self.rollover, unit="ns")
