import pandas as pd

from grokline.tsmod import TimestampModder, increment_for


def us(n):
    return pd.Timedelta(n, unit="us")


def ns(n):
    return pd.Timedelta(n, unit="ns")


def ms(n):
    return pd.Timedelta(n, unit="ms")


def feed(tsm, ts, times=4):
    return [tsm.tsmod(ts) for _ in range(times)]


def test_millisecond_input_moves_in_microseconds():
    tsm = TimestampModder()
    reftime = pd.Timestamp("2006-12-01T01:01:01.001Z")
    assert feed(tsm, reftime) == [reftime, reftime + us(1), reftime + us(2), reftime + us(3)]


def test_microsecond_input_moves_in_nanoseconds():
    tsm = TimestampModder()
    reftime = pd.Timestamp("2006-12-01T01:01:01.000001Z")
    assert feed(tsm, reftime) == [reftime, reftime + ns(1), reftime + ns(2), reftime + ns(3)]

    reftime = pd.Timestamp("2006-12-01T01:01:01.000999Z")
    assert feed(tsm, reftime) == [reftime, reftime + ns(1), reftime + ns(2), reftime + ns(3)]


def test_whole_second_input_moves_in_milliseconds():
    tsm = TimestampModder()
    reftime = pd.Timestamp("2006-12-01T01:01:01Z")
    assert feed(tsm, reftime) == [reftime, reftime + ms(1), reftime + ms(2), reftime + ms(3)]


def test_sequence_of_runs_resets_between_values():
    tsm = TimestampModder()
    t1 = pd.Timestamp("2006-12-01T01:01:01.001Z")
    t2 = pd.Timestamp("2006-12-01T01:01:01.000001Z")
    assert feed(tsm, t1) == [t1, t1 + us(1), t1 + us(2), t1 + us(3)]
    assert feed(tsm, t2) == [t2, t2 + ns(1), t2 + ns(2), t2 + ns(3)]
    assert feed(tsm, t1, 2) == [t1, t1 + us(1)]


def test_none_is_never_modified():
    tsm = TimestampModder()
    assert feed(tsm, None) == [None, None, None, None]
    assert tsm.rep == 0

    reftime = pd.Timestamp("2006-12-01T01:01:01Z")
    tsm.tsmod(reftime)
    tsm.tsmod(reftime)
    assert tsm.tsmod(None) is None
    assert tsm.rep == 0
    # the run was broken, so the same value starts fresh
    assert tsm.tsmod(reftime) == reftime


def test_output_stays_strictly_increasing_past_rollover():
    tsm = TimestampModder()
    reftime = pd.Timestamp("2006-12-01T01:01:01Z")
    out = feed(tsm, reftime, 2500)
    assert all(a < b for a, b in zip(out, out[1:]))
    assert out[998] == reftime + ms(998)
    assert out[999] == reftime + ms(999) + us(1)
    assert out[-1] < reftime + pd.Timedelta(1, unit="s")


def test_increment_for():
    assert increment_for(pd.Timestamp("2006-12-01T01:01:01Z")) == 1_000_000
    assert increment_for(pd.Timestamp("2006-12-01T01:01:01.010Z")) == 1_000
    assert increment_for(pd.Timestamp("2006-12-01T01:01:01.000100Z")) == 1
    assert increment_for(pd.Timestamp("2006-12-01T01:01:01.000000001Z")) == 1
