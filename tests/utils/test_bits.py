from __future__ import annotations

from llmsteg.utils.bits import hamming_distance, high_bits_equal, lsb_changes, lsb_plane, popcount


def test_lsb_plane() -> None:
    assert lsb_plane(b"\x01\x02\x03\xff").tolist() == [1, 0, 1, 1]


def test_popcount() -> None:
    assert popcount(b"") == 0
    assert popcount(b"\xff\x0f\x01") == 13


def test_hamming_distance_uses_common_prefix() -> None:
    assert hamming_distance(b"\x00\xff", b"\xff\xff") == 8
    assert hamming_distance(b"\x00", b"\x01\xff\xff") == 1


def test_lsb_changes() -> None:
    assert lsb_changes(b"\xff\xfe\x00", b"\xfe\xfe\x01") == 2


def test_high_bits_equal() -> None:
    assert high_bits_equal(b"\xfe\x00", b"\xff\x01")
    assert not high_bits_equal(b"\xfe", b"\x7e")
    assert not high_bits_equal(b"\x00", b"\x00\x00")
