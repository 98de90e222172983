"""
TUI JSONL Viewer.

A Textual-based terminal UI for browsing JSON Lines files, one tab per file.

Usage:
    jsonl-viewer events.jsonl logs/

Components:
    - JsonlViewerApp: Main application class
    - DocumentScreen: Tabs, filterable record list and detail panel
    - RecordList: Windowed list of lines
    - RecordDetail: Pretty, Raw and Tree views of the selected line
    - JsonTreePanel: Lazily expanded JSON tree widget
"""
