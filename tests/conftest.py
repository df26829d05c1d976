"""Shared test fixtures."""

import pytest


@pytest.fixture
def smpte_331m_element():
    """Wrap a 4-byte SMPTE 12M word in a 17-byte SMPTE 331M element."""
    def wrap(word, marker=0x81):
        return [marker, *word] + [0] * 12
    return wrap


@pytest.fixture
def ten_hours_word() -> list[int]:
    return [0, 0, 0, 0b0001_0000]


@pytest.fixture
def full_range_word() -> list[int]:
    return [0b0011_1111, 0b0111_1111, 0b0111_1111, 0b0011_1111]
