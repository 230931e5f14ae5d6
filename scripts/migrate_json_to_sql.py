#!/usr/bin/env python3
"""
One-off migration: JSON data file -> SQL key/value table.

Each collection is decoded before it is written, so a corrupt file aborts the
migration instead of copying broken text into the database.

Uso:
  DATABASE_URL=sqlite:///wingman.db python scripts/migrate_json_to_sql.py --data data.json
"""
from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
import sys

# Garantir que o pacote wingman seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wingman.core.config import get_settings
from wingman.core.log import configure_logging
from wingman.db.create_tables import create_all
from wingman.repositories.json_storage import JsonFileStore
from wingman.repositories.sql_store import SQLKeyValueStore
from wingman.repositories.storage import Storage


async def migrate(data_file: Path, key_prefix: str) -> dict[str, int]:
    if not data_file.exists():
        raise SystemExit(f"Arquivo nao encontrado: {data_file}")
    source = Storage(JsonFileStore(data_file), key_prefix=key_prefix)
    target = Storage(SQLKeyValueStore(), key_prefix=key_prefix)
    counts = {}
    for name in ("exercises", "journal", "journeys"):
        records = await getattr(source, name).read_strict()
        await getattr(target, name).replace_all(records)
        counts[name] = len(records)
    return counts


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Copy collections from a JSON data file into the SQL store")
    ap.add_argument("--data", default=settings.data_file, help="JSON data file (default: DATA_FILE)")
    args = ap.parse_args()

    configure_logging(settings.log_level)
    create_all()
    counts = asyncio.run(migrate(Path(args.data), settings.key_prefix))
    print("OK: migracao concluida")
    for name, count in counts.items():
        print(f"  {name}: {count}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
