"""
JSON Tree Panel widget for browsing one record as a tree.

The panel is a view over a core TreeModel: expanding or collapsing a node
flips its path in the model's expansion state, and moving the cursor selects
the node in the model. Children are added to the widget only when a node is
first expanded, so large records cost nothing until they are opened.
"""

from __future__ import annotations

from rich.text import Text
from textual.message import Message
from textual.widgets import Tree
from textual.widgets.tree import TreeNode as WidgetNode

from jsonl_viewer.core import MAX_TREE_DEPTH, TreeModel, TreeNode, children

# Style of the preview per value type
KIND_STYLES: dict[str, str] = {
    "null": "italic #569cd6",
    "boolean": "#569cd6",
    "number": "#b5cea8",
    "string": "#ce9178",
    "array": "#808080",
    "object": "#808080",
    "undefined": "dim",
}

KEY_STYLE = "bold #9cdcfe"

DEPTH_LIMIT_LABEL = f"... (depth limit {MAX_TREE_DEPTH} reached)"


def node_label(node: TreeNode) -> Text:
    """Build the ``key: preview`` label of a node.

    Line breaks in string previews are shown escaped so a label stays on a
    single row.
    """
    shown = node.preview().replace("\r", "\\r").replace("\n", "\\n")
    label = Text()
    label.append(node.label, style=KEY_STYLE)
    label.append(": ")
    label.append(shown, style=KIND_STYLES.get(node.kind, ""))
    return label


class JsonTreePanel(Tree[TreeNode]):
    """
    Lazily expanded tree view of a JSON object or array.

    Attributes:
        model: The tree model backing the panel, or None when empty.
    """

    DEFAULT_CSS = """
    JsonTreePanel {
        height: 1fr;
        padding: 0 1;
    }
    """

    class NodeInspected(Message):
        """Posted when the cursor moves to a node.

        Attributes:
            path: Path of the inspected node.
            display: Display string of the node's value.
        """

        def __init__(self, path: str, display: str) -> None:
            self.path = path
            self.display = display
            super().__init__()

    def __init__(
        self,
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__("root", id=id, classes=classes)
        self.model: TreeModel | None = None
        self.show_root = True

    def load_model(self, model: TreeModel) -> None:
        """Show the root of a model. Only the root's children are added."""
        self.model = model
        self.clear()
        root = model.root_node
        self.root.data = root
        self.root.set_label(node_label(root))
        self.root.allow_expand = root.is_expandable
        if model.is_expanded(root.path):
            self._populate(self.root)
            self.root.expand()

    def clear_model(self) -> None:
        self.model = None
        self.clear()
        self.root.data = None
        self.root.set_label("root")

    def _populate(self, widget_node: WidgetNode[TreeNode]) -> None:
        """Add the children of a node to the widget, once."""
        node = widget_node.data
        if node is None or widget_node.children:
            return

        if node.depth >= MAX_TREE_DEPTH:
            widget_node.add_leaf(DEPTH_LIMIT_LABEL)
            return

        for child in children(node):
            if child.is_expandable:
                widget_node.add(node_label(child), data=child, allow_expand=True)
            else:
                widget_node.add_leaf(node_label(child), data=child)

    def _sync_expansion(self, node: TreeNode | None, expanded: bool) -> None:
        if self.model is None or node is None:
            return
        if self.model.is_expanded(node.path) != expanded:
            self.model.toggle(node.path)

    def on_tree_node_expanded(self, event: Tree.NodeExpanded[TreeNode]) -> None:
        event.stop()
        self._populate(event.node)
        self._sync_expansion(event.node.data, True)

    def on_tree_node_collapsed(self, event: Tree.NodeCollapsed[TreeNode]) -> None:
        event.stop()
        self._sync_expansion(event.node.data, False)

    def on_tree_node_highlighted(self, event: Tree.NodeHighlighted[TreeNode]) -> None:
        event.stop()
        node = event.node.data
        if self.model is None or node is None:
            return
        self.model.select(node.path)
        self.post_message(self.NodeInspected(node.path, self.model.selected_display))
