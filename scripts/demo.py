"""
orderkeep demo run.

Resets the documents table, stores one JSON document, reads it back and prints
the original next to the normalized and order-preserved forms.

Usage:
  python scripts/demo.py [path/to/document.json]
"""

from __future__ import annotations

import pathlib
import sys


ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    # Ensure project root is importable (config.py, database/, ordered_json/).
    sys.path.insert(0, str(ROOT))

from config import get_settings  # noqa: E402
from database.adapter import DocumentStore  # noqa: E402
from database.connection import reset_database  # noqa: E402
from logging_setup import configure_logging  # noqa: E402
from ordered_json.model import key_paths, parse_ordered, serialize  # noqa: E402


SAMPLE_PATH = ROOT / "data" / "sample_movies.json"


def main(argv: list[str]) -> int:
    path = pathlib.Path(argv[1]) if len(argv) > 1 else SAMPLE_PATH
    raw = path.read_text(encoding="utf-8")

    settings = get_settings()
    configure_logging(settings)
    reset_database(settings)
    store = DocumentStore(settings)

    doc_id = store.store(raw)
    print(f"Stored document with ID: {doc_id}")
    doc = store.fetch(doc_id)

    print("\n--- Original JSON ---")
    print(doc.raw)
    print("\n--- Retrieved normalized JSON (order not preserved) ---")
    print(serialize(parse_ordered(doc.normalized), indent=2))
    print("\n--- Retrieved order-preserved JSON (order preserved) ---")
    print(serialize(parse_ordered(doc.order_preserved), indent=2))

    print("\n--- Member order ---")
    for label, text in (("original", doc.raw), ("normalized", doc.normalized), ("preserved", doc.order_preserved)):
        print(f"{label:>10}: " + ", ".join(key_paths(parse_ordered(text))))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
