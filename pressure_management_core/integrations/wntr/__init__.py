"""WNTR integration: build a ``ValveNetwork`` from a ``wntr`` water network model"""

from .network_builder import build_network, build_node_table, build_valve

__all__ = ["build_network", "build_node_table", "build_valve"]
