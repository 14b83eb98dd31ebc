"""
huffman.py - Huffman Coding
============================
Greedy prefix-code construction.

  1. Count character frequencies (first-appearance order).
  2. One leaf per character, stable-sorted by frequency.
  3. Repeatedly take the two lowest nodes off the front of the list and
     append their parent to the end, then stable-sort again.  Equal
     frequencies therefore keep extraction/insertion order: older nodes
     are merged first.
  4. Walk the tree: left edge = 0, right edge = 1.  A text with a single
     distinct character gets the code "0".
  5. Encode the text with the code table.

Trees in snapshots are plain nested dicts:
    {"id": 3, "char": None, "freq": 5, "left": {...}, "right": {...}}
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Huffman(text):",                                   # 0
    "    freq ← count of each character",                   # 1
    "    nodes ← one leaf per character, sorted by freq",   # 2
    "    while |nodes| > 1:",                               # 3
    "        a, b ← the two lowest-frequency nodes",        # 4
    "        nodes.append(Node(a.freq + b.freq, a, b))",    # 5
    "    assign codes: left edge 0, right edge 1",          # 6
    "    encoded ← concatenation of code[c] for c in text", # 7
    "    return codes, encoded",                            # 8
]


@dataclass
class _HNode:
    id:    int
    freq:  int
    char:  Optional[str]     = None
    left:  Optional["_HNode"] = None
    right: Optional["_HNode"] = None

    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "char":  self.char,
            "freq":  self.freq,
            "left":  self.left.to_dict() if self.left else None,
            "right": self.right.to_dict() if self.right else None,
        }


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def huffman(text: str) -> Trace:
    if not isinstance(text, str) or not text:
        raise ConfigurationError("Text to encode must be a non-empty string")

    tb = TraceBuilder("huffman")
    freq: Dict[str, int] = {}
    nodes: List[_HNode] = []
    codes: Dict[str, str] = {}
    encoded = ""

    def emit(kind: Kind, narration: str, line: int, merged: Optional[List[int]] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            text=text,
            frequencies=freq,
            forest=[nd.to_dict() for nd in nodes],
            merged=merged or [],
            codes=codes,
            encoded=encoded,
        )

    emit(Kind.INITIALIZE, f"Build a Huffman code for '{text}' ({len(text)} characters).", line=0)

    for ch in text:
        freq[ch] = freq.get(ch, 0) + 1
    emit(
        Kind.COUNT_FREQUENCIES,
        "Frequencies: " + ", ".join(f"'{c}':{f}" for c, f in freq.items()) + ".",
        line=1,
    )

    next_id = 0
    for ch, f in freq.items():
        nodes.append(_HNode(id=next_id, freq=f, char=ch))
        next_id += 1
    nodes.sort(key=lambda nd: nd.freq)
    emit(
        Kind.CREATE_LEAVES,
        f"Create {len(nodes)} leaves sorted by frequency: "
        + ", ".join(f"'{nd.char}'({nd.freq})" for nd in nodes) + ".",
        line=2,
    )

    while len(nodes) > 1:
        a, b = nodes.pop(0), nodes.pop(0)
        parent = _HNode(id=next_id, freq=a.freq + b.freq, left=a, right=b)
        next_id += 1
        nodes.append(parent)
        nodes.sort(key=lambda nd: nd.freq)
        emit(
            Kind.MERGE_NODES,
            f"Merge {_label(a)} and {_label(b)} into a node of frequency {parent.freq}.",
            line=5, merged=[a.id, b.id, parent.id],
        )

    root = nodes[0]
    emit(Kind.TREE_COMPLETE, f"Tree complete: root frequency {root.freq}.", line=6)

    for ch, code in _walk(root):
        codes[ch] = code
        emit(Kind.ASSIGN_CODE, f"'{ch}' → {code}", line=6)

    encoded = "".join(codes[ch] for ch in text)
    emit(
        Kind.ENCODE,
        f"Encoded with {len(encoded)} bits instead of {8 * len(text)}.",
        line=7,
    )

    emit(Kind.COMPLETE, f"Huffman coding complete: {encoded}", line=8)
    return tb.build()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _walk(root: _HNode):
    """Yield (char, code) in pre-order, left before right."""
    if root.char is not None:
        yield root.char, "0"
        return
    stack = [(root, "")]
    while stack:
        node, prefix = stack.pop()
        if node.char is not None:
            yield node.char, prefix
            continue
        stack.append((node.right, prefix + "1"))
        stack.append((node.left, prefix + "0"))


def _label(node: _HNode) -> str:
    if node.char is not None:
        return f"'{node.char}'({node.freq})"
    return f"node#{node.id}({node.freq})"
