"""Call graph aggregation."""

from tickprof.graph.aggregator import ROOT_NODE, TICK_NODE, CallGraph, CallNode

__all__ = ["CallGraph", "CallNode", "ROOT_NODE", "TICK_NODE"]
