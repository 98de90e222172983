"""Allow ``python -m jsonl_viewer``."""

from jsonl_viewer.tui.app import main

if __name__ == "__main__":
    main()
