import networkx as nx


def to_graph(tree) -> nx.DiGraph:
    """Export the shape of the tree as a directed graph.

    Graph nodes are the tree's keys with `value` and `colour` attributes,
    edges run from parent to child with the `side` of the link and its
    `colour` (the colour stored on the child). The root key is kept in
    G.graph["root"].
    """
    G = nx.DiGraph(root=None if tree.root is None else tree.root.key)
    if tree.root is None:
        return G

    stack = [tree.root]
    while stack:
        node = stack.pop()
        G.add_node(node.key, value=node.value, colour=node.colour.name)
        for side, child in (("left", node.left), ("right", node.right)):
            if child is None:
                continue
            G.add_edge(node.key, child.key, side=side, colour=child.colour.name)
            stack.append(child)
    return G


def black_heights(G: nx.DiGraph) -> set:
    """Black link counts on every root-to-leaf path of an exported tree"""
    if G.graph["root"] is None:
        return set()
    root = G.graph["root"]
    heights = set()
    for leaf in (n for n in G.nodes if G.out_degree(n) < 2):
        path = nx.shortest_path(G, root, leaf)
        heights.add(sum(1 for n in path if G.nodes[n]["colour"] == "BLACK"))
    return heights
