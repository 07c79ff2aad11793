import pytest

from motion_synth.csvio.query_source import QueryRecordSource
from motion_synth.errors import HeaderMismatchError
from motion_synth.tracking.time_value import TimeValue


def test_header_line_is_kept_verbatim():
    source = QueryRecordSource(['"sec","usec","accel_x"\r\n'])
    assert source.header_line == '"sec","usec","accel_x"'
    assert list(source) == []


def test_records_keep_payload_and_parse_time():
    source = QueryRecordSource(["sec,usec,a,b\n", "1,250,foo,3.5\n", "2,0,bar,\n"])
    records = list(source)
    assert [r.time for r in records] == [TimeValue(1, 250), TimeValue(2, 0)]
    assert records[0].line == "1,250,foo,3.5"
    assert records[1].line == "2,0,bar,"
    assert source.records_read == 2


def test_short_record_ends_iteration():
    source = QueryRecordSource(["sec,usec\n", "1,0\n", "2\n", "3,0\n"])
    assert [r.time for r in source] == [TimeValue(1, 0)]


def test_non_integer_timestamp_ends_iteration():
    source = QueryRecordSource(["sec,usec\n", "1,0\n", "1.5,0\n", "3,0\n"])
    assert [r.time for r in source] == [TimeValue(1, 0)]


def test_header_mismatch_is_fatal():
    with pytest.raises(HeaderMismatchError, match="time reference data"):
        QueryRecordSource(["seconds,usec\n"])


def test_empty_file_is_fatal():
    with pytest.raises(HeaderMismatchError, match="empty"):
        QueryRecordSource([])
