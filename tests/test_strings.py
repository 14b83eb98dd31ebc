import pytest

from algoviz.algorithms.kmp import kmp
from algoviz.engine import Kind
from algoviz.errors import ConfigurationError


def test_kmp_example() -> None:
    trace = kmp("ABABDABACDABABCABAB", "ABABCABAB")
    final = trace.last.state

    assert trace.terminal_kind is Kind.COMPLETE
    assert list(final["lps"]) == [0, 0, 1, 2, 0, 1, 2, 3, 4]
    assert list(final["matches"]) == [10]
    assert [s.state["phase"] for s in (trace.first, trace.of_kind(Kind.LPS_COMPLETE)[0])] == ["lps", "search"]


def test_kmp_overlapping_matches() -> None:
    trace = kmp("AAAA", "AA")
    assert list(trace.last.state["matches"]) == [0, 1, 2]
    assert len(trace.of_kind(Kind.MATCH_FOUND)) == 3


def test_kmp_no_match() -> None:
    assert kmp("ABCDEF", "XYZ").terminal_kind is Kind.NOT_FOUND
    assert kmp("AB", "ABC").terminal_kind is Kind.NOT_FOUND


def test_kmp_mismatch_consults_table() -> None:
    trace = kmp("AABAAAB", "AAAB")
    assert trace.of_kind(Kind.USE_LPS)
    assert list(trace.last.state["matches"]) == [3]


def test_kmp_rejects_empty_pattern() -> None:
    with pytest.raises(ConfigurationError):
        kmp("ABC", "")
