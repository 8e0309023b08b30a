# scripts/smoke.py
"""
Smoke Test Script for the undokit history engine.

Usage
-----
1. Walk through the default capacity-3 scenario:
    $ uv run python scripts/smoke.py

2. Use a different capacity:
    $ uv run python scripts/smoke.py --capacity 5
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from undokit import HistoryManager
from undokit.core.events import HistoryEvent
from undokit.documents import TextDocument

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
log = logging.getLogger("smoke")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a small undo/redo walkthrough.")
    parser.add_argument("--capacity", "-c", type=int, default=3, help="Undo history capacity")
    args = parser.parse_args()

    doc = TextDocument("A")
    manager = HistoryManager(doc, args.capacity)

    def report(event: HistoryEvent) -> None:
        log.info(
            "%-10s text=%r undo=%d redo=%d", event.kind.value, doc.text, event.undo_depth,
            event.redo_depth,
        )

    manager.notifier.subscribe(report)

    manager.checkpoint("A")
    for letter in "BCD":
        doc.set_text(letter)
        manager.checkpoint(letter)

    manager.undo()
    manager.redo()
    while manager.undo().is_ok():
        pass

    print("\n--- Undo history ---")
    for snap in manager.history():
        print(f"  {snap.describe()}")
    print("--- Redo history ---")
    for snap in manager.redo_entries():
        print(f"  {snap.describe()}")
    print(f"Final text: {doc.text!r}")


if __name__ == "__main__":
    main()
