import pytest

from canmock.frame import ExtendedId, MockFrame, StandardId


def test_data_frame_round_trip():
    frame = MockFrame.new(StandardId(0x100), [0x10, 0x20])
    assert frame.data() == bytes([0x10, 0x20])
    assert frame.dlc() == 2
    assert frame.id == StandardId(0x100)
    assert not frame.is_remote_frame()
    assert not frame.is_extended()


def test_extended_frame_is_extended():
    frame = MockFrame.new(ExtendedId(0x1ABCDE0), b"\xab\xcd")
    assert frame.is_extended()
    assert frame.id.raw == 0x1ABCDE0


def test_remote_frame_has_no_data():
    frame = MockFrame.new_remote(StandardId(0x55), 4)
    assert frame.is_remote_frame()
    assert frame.dlc() == 4
    assert frame.data() == b""


def test_remote_and_empty_data_frames_differ():
    data_frame = MockFrame.new(StandardId(0x55), b"")
    remote = MockFrame.new_remote(StandardId(0x55), 0)
    assert data_frame.dlc() == remote.dlc()
    assert data_frame != remote


def test_equal_frames_compare_equal():
    a = MockFrame.new(StandardId(0x42), [1, 2, 3])
    b = MockFrame.new(StandardId(0x42), bytes([1, 2, 3]))
    assert a == b
    assert hash(a) == hash(b)


def test_standard_and_extended_with_same_raw_differ():
    assert MockFrame.new(StandardId(0x10), b"") != MockFrame.new(ExtendedId(0x10), b"")


@pytest.mark.parametrize("raw", [0, 0x7FF])
def test_standard_id_limits_accepted(raw):
    assert StandardId(raw).raw == raw


@pytest.mark.parametrize("raw", [-1, 0x800])
def test_standard_id_out_of_range(raw):
    with pytest.raises(ValueError):
        StandardId(raw)


@pytest.mark.parametrize("raw", [-1, 0x2000_0000])
def test_extended_id_out_of_range(raw):
    with pytest.raises(ValueError):
        ExtendedId(raw)


def test_extended_id_upper_limit_accepted():
    assert ExtendedId(0x1FFF_FFFF).raw == 0x1FFF_FFFF


def test_frame_requires_id_type():
    with pytest.raises(TypeError):
        MockFrame.new(0x100, b"")


def test_remote_negative_dlc_rejected():
    with pytest.raises(ValueError):
        MockFrame.new_remote(StandardId(1), -1)