"""
Импорт каталога литературы из текстового файла.

    load-literature [path]

ВНИМАНИЕ: импорт удаляет позиции всех существующих заказов и весь каталог,
после чего вставляет записи из файла заново.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from ..config import settings
from ..database import AsyncSessionLocal, Base, engine
from ..services.literature_import import read_catalog
from ..services.literature_service import LiteratureService

logger = logging.getLogger("load_literature")


async def import_catalog(path: Path) -> int:
    entries = read_catalog(path)

    if settings.create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    try:
        async with AsyncSessionLocal() as db:
            return await LiteratureService(db).replace_catalog(entries)
    finally:
        await engine.dispose()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Replace the literature catalog from a TSV file")
    parser.add_argument(
        "path",
        nargs="?",
        default=settings.literature_source_file,
        help="catalog file, one 'type<TAB>title<TAB>price' per line"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    path = Path(args.path)
    try:
        count = asyncio.run(import_catalog(path))
    except Exception as e:
        logger.error(f"❌ Failed to import literature catalog: {e}")
        return 1

    logger.info(f"✅ Imported {count} literature items from {path.name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
