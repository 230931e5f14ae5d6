#!/usr/bin/env python3
"""
Dump the three collections from the configured store as JSON.

Uso:
  python scripts/export_data.py [--out backup.json]
"""
from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wingman.core.config import get_settings
from wingman.repositories.storage import Storage


async def export(storage: Storage) -> dict:
    return {
        "exercises": [r.to_payload() for r in await storage.exercises.read_strict()],
        "journal": [r.to_payload() for r in await storage.journal.read_strict()],
        "journeys": [r.to_payload() for r in await storage.journeys.read_strict()],
    }


def main() -> None:
    ap = argparse.ArgumentParser(description="Export Wingman collections as JSON")
    ap.add_argument("--out", help="Output file (default: stdout)")
    args = ap.parse_args()

    storage = Storage.from_settings(get_settings())
    dump = json.dumps(asyncio.run(export(storage)), ensure_ascii=False, indent=2)
    if args.out:
        Path(args.out).write_text(dump, encoding="utf-8")
        print(f"OK: exportado para {args.out}")
    else:
        print(dump)


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
