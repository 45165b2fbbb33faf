"""
Graph utilities: statistics, printed summaries and Graphviz export
for a Hypergraph.
"""

from collections import Counter
from typing import Dict

import numpy as np


def get_graph_stats(graph) -> Dict:
    """
    Structural statistics of a hypergraph (no printing).

    Returns:
        dict with node/edge counts, fan-in/fan-out, leaf counts and a
        per-function operation breakdown. `edges` counts argument
        connections (sum of arities), not Edge objects.
    """
    if not graph.nodes:
        return {
            'nodes': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'parameters': 0,
            'inputs': 0,
            'operations': {}
        }

    fan_ins = [edge.arity for edge in graph.edges]
    fan_outs = [len(node.out_edges) for node in graph.nodes]
    op_counter = Counter(type(edge).__name__ for edge in graph.edges)

    return {
        'nodes': len(graph.nodes),
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'parameters': len(graph.parameters()),
        'inputs': len(graph.inputs()),
        'operations': dict(op_counter)
    }


def print_graph_summary(graph, detailed: bool = False) -> Dict:
    """
    Print the statistics of get_graph_stats().

    Args:
        graph: Hypergraph to describe
        detailed: also print one line per node (first 100 nodes)

    Returns:
        the statistics dict
    """
    stats = get_graph_stats(graph)
    if stats['nodes'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*70)
    print("HYPERGRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Parameters:         {stats['parameters']:,}")
    print(f"Inputs:             {stats['inputs']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_type:24s}: {count:6,} ({pct:5.1f}%)")

    if detailed:
        print()
        print("="*70)
        print("DETAILED NODE LIST (first 100 nodes)")
        print("="*70)
        for i, node in enumerate(graph.nodes[:100]):
            edge = graph.edges[node.in_edge]
            names = [graph.nodes[ni].variable_name for ni in edge.tail]
            print(f"Node {i:3d}: {node.variable_name:12s} = {edge.as_string(names)}")

    print("="*70 + "\n")
    return stats


def to_graphviz(graph) -> str:
    """
    DOT description of the graph: one vertex per node, one arrow per
    (argument -> result) pair labelled with the function. Parameters are
    drawn as boxes and inputs as ellipses with a dashed outline.
    """
    lines = ["digraph G {", "  rankdir=LR;", "  nodesep=.05;"]
    for i, node in enumerate(graph.nodes):
        edge = graph.edges[node.in_edge]
        names = [graph.nodes[ni].variable_name for ni in edge.tail]
        label = f"{node.variable_name} = {edge.as_string(names)}".replace('"', '\\"')
        if edge.has_trainable_parameters():
            attrs = "shape=box"
        elif edge.arity == 0:
            attrs = "style=dashed"
        else:
            attrs = "shape=ellipse"
        lines.append(f'  N{i} [label="{label}", {attrs}];')
    for edge in graph.edges:
        fn = type(edge).__name__
        for ni in edge.tail:
            lines.append(f'  N{ni} -> N{edge.head_node} [label="{fn}"];')
    lines.append("}")
    return "\n".join(lines)
