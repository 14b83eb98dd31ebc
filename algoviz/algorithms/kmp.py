"""
kmp.py - Knuth-Morris-Pratt Pattern Matching
=============================================
Two phases in one trace:

  Phase 1 (LPS table)   one Snapshot per character comparison, and one for
                        each outcome: extend (LPS_MATCH), fall back inside
                        the table (LPS_FALLBACK) or record zero (LPS_ZERO).
  Phase 2 (search)      one Snapshot per text/pattern comparison
                        (CHAR_MATCH / MISMATCH), one per full match
                        (MATCH_FOUND, with its start index), and one every
                        time the table is consulted after a mismatch
                        (USE_LPS).

Both loops are the standard recurrence: one comparison per iteration.
"""

from typing import List, Optional

from algoviz.algorithms.common import joined
from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def ComputeLPS(P):",                                   # 0
    "    len ← 0; i ← 1; lps[0] ← 0",                       # 1
    "    while i < m:",                                     # 2
    "        if P[i] == P[len]:",                           # 3
    "            len ← len + 1; lps[i] ← len; i ← i + 1",   # 4
    "        elif len > 0: len ← lps[len - 1]",             # 5
    "        else: lps[i] ← 0; i ← i + 1",                  # 6
    "def KMPSearch(T, P):",                                 # 7
    "    i ← 0; j ← 0",                                     # 8
    "    while i < n:",                                     # 9
    "        if T[i] == P[j]:",                             # 10
    "            i ← i + 1; j ← j + 1",                     # 11
    "            if j == m: report i - j; j ← lps[j - 1]",  # 12
    "        elif j > 0: j ← lps[j - 1]",                   # 13
    "        else: i ← i + 1",                              # 14
    "    return matches",                                   # 15
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def kmp(text: str, pattern: str) -> Trace:
    if not isinstance(text, str) or not isinstance(pattern, str):
        raise ConfigurationError("Text and pattern must be strings")
    if not pattern:
        raise ConfigurationError("Pattern must not be empty")

    n, m = len(text), len(pattern)
    tb = TraceBuilder("kmp")
    lps = [0] * m
    matches: List[int] = []

    def emit(kind: Kind, narration: str, line: int, phase: str,
             i: Optional[int] = None, j: Optional[int] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            phase=phase, text=text, pattern=pattern,
            lps=lps, i=i, j=j, matches=matches,
        )

    emit(Kind.INITIALIZE, f"Build the LPS table for pattern '{pattern}' ({m} characters).", line=1, phase="lps")

    # ---------- Phase 1: LPS table ----------
    length, i = 0, 1
    while i < m:
        emit(
            Kind.LPS_COMPARE,
            f"Compare P[{i}] = '{pattern[i]}' with P[{length}] = '{pattern[length]}'.",
            line=3, phase="lps", i=i, j=length,
        )
        if pattern[i] == pattern[length]:
            length += 1
            lps[i] = length
            emit(Kind.LPS_MATCH, f"Match: lps[{i}] = {length}.", line=4, phase="lps", i=i, j=length)
            i += 1
        elif length > 0:
            old = length
            length = lps[length - 1]
            emit(
                Kind.LPS_FALLBACK,
                f"Mismatch: fall back from len {old} to lps[{old - 1}] = {length}.",
                line=5, phase="lps", i=i, j=length,
            )
        else:
            lps[i] = 0
            emit(Kind.LPS_ZERO, f"Mismatch with len 0: lps[{i}] = 0.", line=6, phase="lps", i=i, j=0)
            i += 1

    emit(Kind.LPS_COMPLETE, f"LPS table: {lps}. Start scanning the text.", line=8, phase="search", i=0, j=0)

    # ---------- Phase 2: search ----------
    i = j = 0
    while i < n:
        if text[i] == pattern[j]:
            emit(
                Kind.CHAR_MATCH,
                f"T[{i}] = '{text[i]}' matches P[{j}].",
                line=10, phase="search", i=i, j=j,
            )
            i += 1
            j += 1
            if j == m:
                start = i - j
                matches.append(start)
                j = lps[j - 1]
                emit(
                    Kind.MATCH_FOUND,
                    f"Full match at index {start}. Continue with j = lps[{m - 1}] = {j}.",
                    line=12, phase="search", i=i, j=j,
                )
        else:
            emit(
                Kind.MISMATCH,
                f"T[{i}] = '{text[i]}' does not match P[{j}] = '{pattern[j]}'.",
                line=10, phase="search", i=i, j=j,
            )
            if j > 0:
                old = j
                j = lps[j - 1]
                emit(
                    Kind.USE_LPS,
                    f"Consult the table: j = lps[{old - 1}] = {j}; text index stays at {i}.",
                    line=13, phase="search", i=i, j=j,
                )
            else:
                i += 1

    if matches:
        emit(
            Kind.COMPLETE,
            f"Found {len(matches)} match(es) at index {joined(matches)}.",
            line=15, phase="done",
        )
    else:
        emit(Kind.NOT_FOUND, f"Pattern '{pattern}' does not occur in the text.", line=15, phase="done")
    return tb.build()
