"""Report rendering."""

from tickprof.report.callgrind import render_callgrind
from tickprof.report.frame import edges_to_frame, graph_to_frame
from tickprof.report.table import NOT_ACTIVE, render_table

__all__ = ["NOT_ACTIVE", "render_table", "render_callgrind", "graph_to_frame", "edges_to_frame"]
