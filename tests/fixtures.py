"""
Test fixtures for tgfgraph.

This module provides sample TGF documents and helpers for building the
graphs they describe.
"""

from tgfgraph.graph import Graph

# Two nodes and one edge
SIMPLE_GRAPH = """1 First node
2 Second node
#
1 2
"""

# Seven months and ten edges; node 7 touches three of them
MONTHS_GRAPH = """1 January
2 March
3 April
4 May
5 December
6 June
7 September
#
1 2
3 2
4 3
5 1
5 3
6 3
6 1
7 5
7 6
7 1
"""

MONTH_NODES = [
    (1, "January"),
    (2, "March"),
    (3, "April"),
    (4, "May"),
    (5, "December"),
    (6, "June"),
    (7, "September"),
]

MONTH_EDGES = [
    (1, 2),
    (3, 2),
    (4, 3),
    (5, 1),
    (5, 3),
    (6, 3),
    (6, 1),
    (7, 5),
    (7, 6),
    (7, 1),
]

INTEGER_GRAPH = """1 -10
2 20
3 +30
#
1 2
2 3
3 1
"""

# Value on line 2 is not an integer
BAD_INTEGER_GRAPH = """1 10
2 banana
#
1 2
"""

# No "#" line at all
MISSING_DELIMITER = """1 January
2 March
1 2
"""

WINDOWS_LINE_ENDINGS = "1 First node\r\n2 Second node\r\n#\r\n1 2\r\n"


def months_graph() -> Graph[str]:
    """Build the months graph directly, without the codec."""
    return Graph.from_pairs(MONTH_NODES, MONTH_EDGES)
