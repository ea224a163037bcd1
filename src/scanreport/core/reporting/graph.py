"""Vulnerability origin graph.

Shows, per target, how each vulnerable package entered it: the target is the
root, each vulnerable package is a child, and below it hang the packages that
depend on it, up to the top-level dependency.

    package-lock.json
    ├── node-fetch@1.7.3
    │   └── isomorphic-fetch@2.2.1
    └── sanitize-html@1.20.0

Paths sharing a prefix share branches; siblings keep insertion order.
"""

import io

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from scanreport.core.config import TableConfig
from scanreport.core.models import DependencyTreeItem, Result

# Wide enough that no package identifier wraps.
RENDER_WIDTH = 10_000


class TreeNode:
    """Tree node whose children are keyed by identifier."""

    def __init__(self, id: str):
        self.id = id
        self.children: dict[str, "TreeNode"] = {}

    def child(self, id: str) -> "TreeNode":
        """Return the child with this identifier, creating it on first use."""
        node = self.children.get(id)
        if node is None:
            node = self.children[id] = TreeNode(id)
        return node


class OriginTree:
    """Dependency-origin tree for one target."""

    def __init__(self, root: str):
        self.root = TreeNode(root)

    def add_parents(self, package_id: str, parents: list[DependencyTreeItem]) -> None:
        """Insert a package and its whole parent tree below the root."""
        self._attach(self.root.child(package_id), parents)

    def _attach(self, node: TreeNode, parents: list[DependencyTreeItem]) -> None:
        for parent in parents:
            self._attach(node.child(parent.id), parent.parents)

    def to_rich(self) -> Tree:
        """Build a rich Tree mirroring the merged node structure."""
        tree = Tree(Text(self.root.id))
        self._add_branches(self.root, tree)
        return tree

    def _add_branches(self, node: TreeNode, branch: Tree) -> None:
        for child in node.children.values():
            self._add_branches(child, branch.add(Text(child.id)))

    def render(self) -> str:
        buffer = io.StringIO()
        console = Console(
            file=buffer,
            width=RENDER_WIDTH,
            color_system=None,
            highlight=False,
            emoji=False,
        )
        console.print(self.to_rich())
        return buffer.getvalue()


def build_origin_tree(result: Result) -> OriginTree:
    """Build the origin tree for every vulnerability of a result."""
    tree = OriginTree(result.target)
    for vuln in result.vulnerabilities:
        tree.add_parents(vuln.package_identifier, vuln.pkg_parents)
    return tree


def render_origin_graph(results: list[Result], config: TableConfig) -> str:
    """Render the origin graph section for results carrying parent chains.

    Args:
        results: Scan results, in report order
        config: Formatting constants (section heading)

    Returns:
        Section text, or an empty string when no result has a parent chain
    """
    trees = [build_origin_tree(r) for r in results if r.has_origin_chains]
    if not trees:
        return ""

    heading = config.graph_heading
    parts = [f"\n{heading}\n{'=' * len(heading)}\n"]
    for tree in trees:
        parts.append(tree.render() + "\n")
    return "".join(parts)
