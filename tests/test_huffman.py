import pytest

from algoviz.algorithms.huffman import huffman
from algoviz.engine import Kind
from algoviz.errors import ConfigurationError


def _decode(bits: str, codes: dict) -> str:
    reverse = {code: ch for ch, code in codes.items()}
    out, buf = [], ""
    for b in bits:
        buf += b
        if buf in reverse:
            out.append(reverse[buf])
            buf = ""
    assert buf == ""
    return "".join(out)


def test_small_text_codes() -> None:
    trace = huffman("AAABBC")
    final = trace.last.state
    assert dict(final["frequencies"]) == {"A": 3, "B": 2, "C": 1}
    assert dict(final["codes"]) == {"A": "0", "C": "10", "B": "11"}
    assert final["encoded"] == "000111110"
    assert len(trace.of_kind(Kind.MERGE_NODES)) == 2


def test_codes_are_prefix_free_and_decode() -> None:
    text = "HUFFMAN CODING ALGORITHM"
    trace = huffman(text)
    codes = dict(trace.last.state["codes"])

    assert set(codes) == set(text)
    for a in codes.values():
        for b in codes.values():
            assert a == b or not b.startswith(a)
    assert _decode(trace.last.state["encoded"], codes) == text
    assert trace.terminal_kind is Kind.COMPLETE


def test_single_character_gets_code_zero() -> None:
    trace = huffman("aaaa")
    assert dict(trace.last.state["codes"]) == {"a": "0"}
    assert trace.last.state["encoded"] == "0000"
    assert not trace.of_kind(Kind.MERGE_NODES)


def test_forest_shrinks_by_one_per_merge() -> None:
    trace = huffman("ABRACADABRA")
    sizes = [len(s.state["forest"]) for s in trace.of_kind(Kind.MERGE_NODES)]
    assert sizes == [4, 3, 2, 1]


def test_empty_text_rejected() -> None:
    with pytest.raises(ConfigurationError):
        huffman("")
