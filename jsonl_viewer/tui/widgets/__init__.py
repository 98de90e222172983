"""Custom widgets for the JSONL viewer."""

from jsonl_viewer.tui.widgets.json_tree_panel import JsonTreePanel
from jsonl_viewer.tui.widgets.node_value_panel import NodeValuePanel
from jsonl_viewer.tui.widgets.record_detail import RecordDetail
from jsonl_viewer.tui.widgets.record_list import RecordList
from jsonl_viewer.tui.widgets.syntax_view import JsonSyntaxView, highlight_json

__all__ = [
    "JsonSyntaxView",
    "JsonTreePanel",
    "NodeValuePanel",
    "RecordDetail",
    "RecordList",
    "highlight_json",
]
