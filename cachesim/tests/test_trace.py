import pytest
from cachesim.core.errors import TraceFormatError
from cachesim.core.trace import Operation, TraceEvent, iter_events, parse_line, read_trace


@pytest.mark.parametrize('text,op,address,size', [
    (' L 10,1', Operation.LOAD, 0x10, 1),
    (' S 7ff0005c8,8', Operation.STORE, 0x7ff0005c8, 8),
    (' M 0421c7f0,4\n', Operation.MODIFY, 0x421c7f0, 4),
    ('I 0400d7d4,8', Operation.OTHER, 0x400d7d4, 8),
    ('L ffffffffffffffff,8', Operation.LOAD, (1 << 64) - 1, 8),
    ('\tL 1A , 2', Operation.LOAD, 0x1A, 2),
])
def test_parse_line(text, op, address, size):
    event = parse_line(text)
    assert event.operation is op
    assert event.address == address
    assert event.size == size


def test_blank_line_is_skipped():
    assert parse_line('') is None
    assert parse_line('   \n') is None


@pytest.mark.parametrize('text', ['garbage', ' L 10', ' L zz,1', ' L 10,x', ' L 1ffffffffffffffff,1'])
def test_malformed_line_raises(text):
    with pytest.raises(TraceFormatError) as excinfo:
        parse_line(text, 7)
    assert excinfo.value.lineno == 7
    assert 'line 7' in str(excinfo.value)


def test_operation_access_counts():
    assert Operation.LOAD.accesses == 1
    assert Operation.STORE.accesses == 1
    assert Operation.MODIFY.accesses == 2
    assert Operation.OTHER.accesses == 0
    assert Operation.from_code('I') is Operation.OTHER


def test_event_format_keeps_original_code():
    assert TraceEvent(Operation.LOAD, 0x10, 1).format() == 'L 10, 1'
    assert parse_line('I 0400d7d4,8').format() == 'I 400d7d4, 8'


def test_iter_events_is_lazy_and_reports_line_numbers():
    lines = iter([' L 10,1', '', ' S 20,1', 'oops'])
    events = iter_events(lines)
    assert next(events).address == 0x10
    assert next(events).address == 0x20
    with pytest.raises(TraceFormatError) as excinfo:
        next(events)
    assert excinfo.value.lineno == 4


def test_read_trace(trace_path):
    events = list(read_trace(trace_path('mixed.trace')))
    assert [e.operation for e in events] == [
        Operation.OTHER, Operation.MODIFY, Operation.LOAD,
        Operation.OTHER, Operation.STORE, Operation.LOAD,
    ]


def test_read_trace_rejects_non_ascii_bytes(tmp_path):
    # Input: second line carries bytes that are not text.
    # Expected: TraceFormatError pointing at line 2, chained to the decode error.
    bad = tmp_path / 'bad.trace'
    bad.write_bytes(b' L 10,1\n\xff\xfe L 20,1\n')
    events = read_trace(str(bad))
    assert next(events).address == 0x10
    with pytest.raises(TraceFormatError) as excinfo:
        next(events)
    assert excinfo.value.lineno == 2
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_read_trace_accepts_crlf(tmp_path):
    path = tmp_path / 'dos.trace'
    path.write_bytes(b' L 10,1\r\n S 20,2\r\n')
    assert [e.size for e in read_trace(str(path))] == [1, 2]
