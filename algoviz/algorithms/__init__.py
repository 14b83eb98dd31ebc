"""
algoviz.algorithms - Algorithm Registry
========================================
Single source of truth for every algorithm the visualizer knows about.

    from algoviz.algorithms import REGISTRY, get_algorithm, generate

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, pseudocode, category, inputs, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine, the input layer and the
web API all consume it, so adding an algorithm is: write the generator,
add one entry here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

import structlog

from algoviz.engine.snapshot import Trace
from algoviz.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Import all generator modules
# ---------------------------------------------------------------------------
from algoviz.algorithms.bfs              import bfs              as _bfs,    PSEUDOCODE as _bfs_pc
from algoviz.algorithms.dfs              import dfs              as _dfs,    PSEUDOCODE as _dfs_pc
from algoviz.algorithms.dijkstra         import dijkstra         as _dij,    PSEUDOCODE as _dij_pc
from algoviz.algorithms.prim             import prim             as _prim,   PSEUDOCODE as _prim_pc
from algoviz.algorithms.kruskal          import kruskal          as _krus,   PSEUDOCODE as _krus_pc
from algoviz.algorithms.bellman_ford     import bellman_ford     as _bf,     PSEUDOCODE as _bf_pc
from algoviz.algorithms.topological_sort import topological_sort as _topo,   PSEUDOCODE as _topo_pc
from algoviz.algorithms.floyd_warshall   import floyd_warshall   as _fw,     PSEUDOCODE as _fw_pc
from algoviz.algorithms.union_find       import union_find       as _uf,     PSEUDOCODE as _uf_pc
from algoviz.algorithms.selection_sort   import selection_sort   as _sel,    PSEUDOCODE as _sel_pc
from algoviz.algorithms.counting_sort    import counting_sort    as _cnt,    PSEUDOCODE as _cnt_pc
from algoviz.algorithms.quick_sort       import quick_sort       as _qs,     PSEUDOCODE as _qs_pc
from algoviz.algorithms.merge_sort       import merge_sort       as _ms,     PSEUDOCODE as _ms_pc
from algoviz.algorithms.bucket_sort      import bucket_sort      as _bkt,    PSEUDOCODE as _bkt_pc
from algoviz.algorithms.linear_search    import linear_search    as _lin,    PSEUDOCODE as _lin_pc
from algoviz.algorithms.binary_search    import binary_search    as _bin,    PSEUDOCODE as _bin_pc
from algoviz.algorithms.kmp              import kmp              as _kmp,    PSEUDOCODE as _kmp_pc
from algoviz.algorithms.n_queens         import n_queens         as _nq,     PSEUDOCODE as _nq_pc
from algoviz.algorithms.sudoku           import sudoku           as _sud,    PSEUDOCODE as _sud_pc
from algoviz.algorithms.huffman          import huffman          as _huf,    PSEUDOCODE as _huf_pc
from algoviz.algorithms.knapsack         import knapsack         as _knap,   PSEUDOCODE as _knap_pc

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Page modes - the closed set of tabs every algorithm page offers
# ---------------------------------------------------------------------------
class ViewMode(Enum):
    VISUALIZER = "visualizer"
    THEORY     = "theory"
    PSEUDOCODE = "pseudocode"


# ---------------------------------------------------------------------------
# AlgoInfo - metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bfs"
    label:            str                    # human label, e.g. "Breadth-First Search"
    fn:               Callable[..., Trace]   # the trace generator
    pseudocode:       List[str]              # lines for the side-panel
    category:         str                    # "graph", "sorting", …
    inputs:           List[str] = field(default_factory=list)   # generator keyword arguments
    complexity_time:  str       = ""         # e.g. "O(V + E)"
    complexity_space: str       = ""         # e.g. "O(V)"
    description:      str       = ""         # one-liner for the UI card
    theory:           str       = ""         # paragraph for the Theory tab

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "category":         self.category,
            "inputs":           list(self.inputs),
            "pseudocode":       list(self.pseudocode),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
            "theory":           self.theory,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # ---------- graph ----------
    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, pseudocode=_bfs_pc,
        category="graph", inputs=["graph", "start"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer and records each node's level.",
        theory=(
            "BFS visits nodes in order of their distance (in edges) from the start. "
            "A FIFO queue guarantees that every node at level k is dequeued before any "
            "node at level k + 1, which is why BFS finds shortest paths in unweighted graphs."
        ),
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, pseudocode=_dfs_pc,
        category="graph", inputs=["graph", "start"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives as deep as possible, then backtracks.",
        theory=(
            "DFS follows one branch until it runs out of unvisited neighbours, then "
            "backtracks to the most recent node that still has some. The recursion stack "
            "is the path from the start to the current node; tree edges form a DFS tree."
        ),
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dij, pseudocode=_dij_pc,
        category="graph", inputs=["graph", "source"],
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Greedily finalises the closest node. Needs non-negative weights.",
        theory=(
            "Dijkstra keeps a tentative distance for every node and repeatedly finalises "
            "the unvisited node with the smallest one, relaxing its outgoing edges. With "
            "non-negative weights a finalised distance can never improve later."
        ),
    ),

    "prim": AlgoInfo(
        key="prim", label="Prim's MST", fn=_prim, pseudocode=_prim_pc,
        category="graph", inputs=["graph", "start"],
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Grows one tree by always adding the cheapest crossing edge.",
        theory=(
            "Prim's algorithm starts from a single node and, at each step, adds the "
            "lightest edge with exactly one endpoint in the tree. By the cut property "
            "that edge belongs to some minimum spanning tree."
        ),
    ),

    "kruskal": AlgoInfo(
        key="kruskal", label="Kruskal's MST", fn=_krus, pseudocode=_krus_pc,
        category="graph", inputs=["graph"],
        complexity_time="O(E log E)", complexity_space="O(V)",
        description="Adds edges cheapest-first unless they close a cycle.",
        theory=(
            "Kruskal sorts all edges by weight and accepts each one that joins two "
            "different components. A union-find structure with path compression and "
            "union by rank answers 'same component?' in near-constant time."
        ),
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman-Ford", fn=_bf, pseudocode=_bf_pc,
        category="graph", inputs=["graph", "source"],
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Handles negative edges. Detects negative cycles.",
        theory=(
            "Bellman-Ford relaxes every edge |V| - 1 times; after round k every shortest "
            "path using at most k edges is known. If an edge can still be relaxed after "
            "that, a negative cycle is reachable from the source."
        ),
    ),

    "topological_sort": AlgoInfo(
        key="topological_sort", label="Topological Sort (Kahn)", fn=_topo, pseudocode=_topo_pc,
        category="graph", inputs=["graph"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Orders a DAG so every edge points forward.",
        theory=(
            "Kahn's algorithm repeatedly outputs a node with no remaining incoming edges "
            "and deletes its outgoing edges. If nodes remain when no such node exists, "
            "the graph contains a cycle and has no topological order."
        ),
    ),

    "floyd_warshall": AlgoInfo(
        key="floyd_warshall", label="Floyd-Warshall", fn=_fw, pseudocode=_fw_pc,
        category="graph", inputs=["graph"],
        complexity_time="O(V³)", complexity_space="O(V²)",
        description="All-pairs shortest paths on a live distance matrix.",
        theory=(
            "Floyd-Warshall allows one more intermediate node per round: after round k the "
            "matrix holds the shortest path between every pair that only passes through the "
            "first k nodes. Negative edges are fine; a negative diagonal means a negative cycle."
        ),
    ),

    "union_find": AlgoInfo(
        key="union_find", label="Union-Find (Disjoint Sets)", fn=_uf, pseudocode=_uf_pc,
        category="graph", inputs=["size", "operations"],
        complexity_time="O(α(n)) amortised per operation", complexity_space="O(n)",
        description="Replays union and find operations on a disjoint-set forest.",
        theory=(
            "Each set is a tree whose root names the set. Union by rank keeps the trees "
            "shallow and path compression flattens every path that find walks, so a "
            "sequence of m operations costs O(m · α(n)), effectively constant per operation."
        ),
    ),

    # ---------- sorting ----------
    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", fn=_sel, pseudocode=_sel_pc,
        category="sorting", inputs=["values"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Selects the minimum of the unsorted part each pass.",
        theory=(
            "Selection sort grows a sorted prefix one element at a time by finding the "
            "minimum of the remaining suffix and swapping it into place. It always makes "
            "n(n-1)/2 comparisons and n - 1 exchanges."
        ),
    ),

    "counting_sort": AlgoInfo(
        key="counting_sort", label="Counting Sort", fn=_cnt, pseudocode=_cnt_pc,
        category="sorting", inputs=["values"],
        complexity_time="O(n + k)", complexity_space="O(n + k)",
        description="Counts keys, prefix-sums the counts, places stably.",
        theory=(
            "Counting sort never compares elements. It counts occurrences of each key, "
            "turns the counts into end positions with a prefix sum and places the input "
            "right-to-left so equal keys keep their original order."
        ),
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", fn=_qs, pseudocode=_qs_pc,
        category="sorting", inputs=["values"],
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Partitions around a pivot, then sorts each side.",
        theory=(
            "Quick sort picks a pivot (here the last element), moves everything not larger "
            "than it to the left (Lomuto partition) and recurses on both sides. The pivot "
            "lands in its final position after each partition."
        ),
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", fn=_ms, pseudocode=_ms_pc,
        category="sorting", inputs=["values"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits in half, sorts both halves, merges them.",
        theory=(
            "Merge sort divides the array until single elements remain, then merges "
            "sorted runs pairwise. Taking from the left run on ties keeps it stable."
        ),
    ),

    "bucket_sort": AlgoInfo(
        key="bucket_sort", label="Bucket Sort", fn=_bkt, pseudocode=_bkt_pc,
        category="sorting", inputs=["values", "buckets"],
        complexity_time="O(n + k) avg", complexity_space="O(n + k)",
        description="Scatters values in [0, 1] into buckets and sorts each.",
        theory=(
            "Bucket sort assumes values spread evenly over [0, 1]. Each value goes to "
            "bucket floor(x · k); small buckets are sorted with insertion sort and "
            "concatenated in order."
        ),
    ),

    # ---------- searching ----------
    "linear_search": AlgoInfo(
        key="linear_search", label="Linear Search", fn=_lin, pseudocode=_lin_pc,
        category="searching", inputs=["values", "target"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Checks every element in turn.",
        theory="Linear search works on any array, sorted or not, by probing each index in order.",
    ),

    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", fn=_bin, pseudocode=_bin_pc,
        category="searching", inputs=["values", "target"],
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halves a sorted interval at every probe.",
        theory=(
            "Binary search compares the target with the middle of the remaining interval "
            "and discards the half that cannot contain it. It requires sorted input."
        ),
    ),

    # ---------- strings ----------
    "kmp": AlgoInfo(
        key="kmp", label="KMP Pattern Matching", fn=_kmp, pseudocode=_kmp_pc,
        category="strings", inputs=["text", "pattern"],
        complexity_time="O(n + m)", complexity_space="O(m)",
        description="Never re-reads a text character thanks to the LPS table.",
        theory=(
            "Knuth-Morris-Pratt precomputes, for every prefix of the pattern, the length "
            "of its longest proper prefix that is also a suffix. On a mismatch the search "
            "slides the pattern by that amount instead of restarting."
        ),
    ),

    # ---------- backtracking ----------
    "n_queens": AlgoInfo(
        key="n_queens", label="N-Queens", fn=_nq, pseudocode=_nq_pc,
        category="backtracking", inputs=["n"],
        complexity_time="O(n!)", complexity_space="O(n)",
        description="Places n non-attacking queens, column by column.",
        theory=(
            "The solver places one queen per column, trying rows top to bottom. When no "
            "row in a column is safe it removes the previous queen and tries that "
            "column's next row."
        ),
    ),

    "sudoku": AlgoInfo(
        key="sudoku", label="Sudoku Solver", fn=_sud, pseudocode=_sud_pc,
        category="backtracking", inputs=["grid"],
        complexity_time="O(N^(empty cells))", complexity_space="O(N²)",
        description="Fills empty cells with backtracking search.",
        theory=(
            "Each empty cell is filled with a digit not yet in its row, column or box. "
            "When a cell has no candidate left, the solver undoes the most recent "
            "placement and tries the next candidate there."
        ),
    ),

    # ---------- greedy ----------
    "huffman": AlgoInfo(
        key="huffman", label="Huffman Coding", fn=_huf, pseudocode=_huf_pc,
        category="greedy", inputs=["text"],
        complexity_time="O(k log k)", complexity_space="O(k)",
        description="Builds an optimal prefix code from character frequencies.",
        theory=(
            "Huffman coding repeatedly merges the two least frequent subtrees. Frequent "
            "characters end up near the root with short codes, rare ones deep with long codes."
        ),
    ),

    # ---------- dynamic programming ----------
    "knapsack": AlgoInfo(
        key="knapsack", label="0/1 Knapsack", fn=_knap, pseudocode=_knap_pc,
        category="dynamic_programming", inputs=["weights", "values", "capacity"],
        complexity_time="O(n · W)", complexity_space="O(n · W)",
        description="Fills the DP table cell by cell, then traces back the chosen items.",
        theory=(
            "Each item is either taken whole or left behind. dp[i][w] = max(dp[i-1][w], "
            "dp[i-1][w - weight_i] + value_i) builds the answer from smaller capacities and "
            "fewer items; walking back from dp[n][W] recovers which items were taken."
        ),
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_category(category: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.category == category]


def generate(key: str, **inputs) -> Trace:
    """Run the generator registered under `key` with keyword `inputs`."""
    info = get_algorithm(key)
    if info is None:
        raise ConfigurationError(f"Unknown algorithm {key!r}")
    unexpected = set(inputs) - set(info.inputs)
    if unexpected:
        raise ConfigurationError(
            f"{info.label} does not take {', '.join(sorted(unexpected))}"
        )
    log.debug("trace.generate", algorithm=key)
    return info.fn(**inputs)


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "ViewMode",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_category",
    "generate",
]
