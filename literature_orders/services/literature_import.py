"""
Разбор файла каталога литературы.

Формат: одна запись на непустую строку, ``type<TAB>title<TAB>price``.
Название может само содержать табуляции - это все между первым и последним
полем. В цене удаляются все пробелы, первая запятая считается десятичным
разделителем; результат хранится в копейках.
"""
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from pathlib import Path
from typing import List, Union

from ..exceptions import CatalogFormatError
from ..schemas.literature import CatalogEntry

_WHITESPACE = re.compile(r"\s+")


def parse_price(raw: str) -> int:
    """'1 234,50' -> 123450"""
    normalized = _WHITESPACE.sub("", raw).replace(",", ".", 1)
    try:
        value = Decimal(normalized)
    except InvalidOperation:
        raise CatalogFormatError(f"invalid price {raw!r}")

    if not value.is_finite() or value < 0:
        raise CatalogFormatError(f"invalid price {raw!r}")

    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_catalog(text: str, source: str = "catalog") -> List[CatalogEntry]:
    lines = [line.strip() for line in re.split(r"\r?\n", text)]
    lines = [line for line in lines if line]

    entries = []
    for index, line in enumerate(lines, start=1):
        parts = line.split("\t")
        expected = f'expected "<type>\\t<title>\\t<price>", got "{line}"'

        if len(parts) < 3:
            raise CatalogFormatError(f"Invalid line {index} in {source}: {expected}")

        type_ = parts[0].strip()
        title = "\t".join(parts[1:-1]).strip()
        price_raw = parts[-1].strip()

        if not type_ or not title or not price_raw:
            raise CatalogFormatError(f"Invalid line {index} in {source}: {expected}")

        try:
            price = parse_price(price_raw)
        except CatalogFormatError:
            raise CatalogFormatError(f'Invalid price at line {index} in {source}: "{price_raw}"')

        entries.append(CatalogEntry(type=type_, title=title, price=price, sort_order=index))

    return entries


def read_catalog(path: Union[str, Path]) -> List[CatalogEntry]:
    path = Path(path)
    return parse_catalog(path.read_text(encoding="utf-8"), source=path.name)
