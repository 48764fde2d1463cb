# visualization.py
import matplotlib.pyplot as plt
from matplotlib.lines import Line2D

from config import FIGURE_SIZE

# Style mapping for search tree nodes
STYLE_MAP = {
    "root":      {"color": "lightgray",  "label": "Search"},
    "task":      {"color": "lightgreen", "label": "Task decomposed"},
    "failed":    {"color": "salmon",     "label": "Task failed"},
    "primitive": {"color": "lightblue",  "label": "Primitive selected"},
}


class SearchNode:
    def __init__(self, name, kind, depth, parent=None):
        self.name = name
        self.kind = kind
        self.depth = depth
        self.parent = parent
        self.children = []
        self.failure = None
        self.x = 0.0

    @property
    def failed(self):
        return self.failure is not None

    def walk(self):
        yield self
        for child in self.children:
            yield from child.walk()


def build_search_tree(trace):
    """Rebuild the decomposition tree explored by a search from a RecordingTrace."""
    root = SearchNode("search", "root", 0)
    current = root
    for event in trace.events:
        if event.kind == "push":
            node = SearchNode(event.name, "task", current.depth + 1, current)
            current.children.append(node)
            current = node
        elif event.kind == "pop":
            current = current.parent
        elif event.kind == "primitive":
            current.children.append(SearchNode(event.name, "primitive", current.depth + 1, current))
        elif event.kind == "fail":
            # Innermost context is the task that failed
            if current.failure is None:
                current.failure = event.detail
                current.kind = "failed"
    if trace.result is None:
        root.failure = "no plan"
    return root


def _layout(root):
    next_x = [0]

    def place(node):
        if not node.children:
            node.x = next_x[0]
            next_x[0] += 1
            return
        for child in node.children:
            place(child)
        node.x = (node.children[0].x + node.children[-1].x) / 2.0

    place(root)
    return next_x[0]


def plot_search_tree(trace, ax=None, title=None):
    """
    Draw the search recorded by ``trace``: tasks that failed in red,
    selected primitives in blue.

    Returns:
        tuple: (figure, axes)
    """
    root = build_search_tree(trace)
    width = _layout(root)

    if ax is None:
        fig, ax = plt.subplots(figsize=FIGURE_SIZE)
    else:
        fig = ax.figure

    max_depth = max(node.depth for node in root.walk())
    for node in root.walk():
        for child in node.children:
            ax.plot([node.x, child.x], [-node.depth, -child.depth], color="gray", linewidth=1, zorder=1)

    for node in root.walk():
        style = STYLE_MAP[node.kind]
        label = node.name if node.failure is None or node.kind == "root" else f"{node.name}\n({node.failure})"
        ax.text(node.x, -node.depth, label, ha="center", va="center", fontsize=8, zorder=2,
                bbox={"boxstyle": "round", "facecolor": style["color"], "edgecolor": "black"})

    handles = [Line2D([], [], marker="s", linestyle="", markersize=10,
                      markerfacecolor=style["color"], markeredgecolor="black", label=style["label"])
               for kind, style in STYLE_MAP.items() if kind != "root"]
    ax.legend(handles=handles, loc="upper right")

    ax.set_xlim(-1, max(width, 1))
    ax.set_ylim(-max_depth - 1, 1)
    ax.axis("off")
    ax.set_title(title or f"Search tree ({'plan found' if trace.result is not None else 'planning failed'})")
    fig.tight_layout()
    return fig, ax
