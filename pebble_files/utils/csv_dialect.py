"""CSV record helpers built on the standard ``csv`` module.

Records follow the classic dialect: minimal quoting, embedded enclosure
characters doubled, and an optional escape character that makes the next
character literal when reading. The writer doubles escape characters found
in a field so the reader gives them back unchanged.
"""

import csv
import io
from collections.abc import Iterable, Iterator
from typing import Any


def dialect_options(delimiter: str, enclosure: str, escape: str) -> dict[str, Any]:
    """Map delimiter/enclosure/escape onto ``csv`` reader and writer options.

    An empty ``escape`` disables escaping.
    """
    return {
        "delimiter": delimiter,
        "quotechar": enclosure,
        "escapechar": escape or None,
        "doublequote": True,
        "quoting": csv.QUOTE_MINIMAL,
        "lineterminator": "\n",
    }


def parse_record(
    lines: Iterator[str], delimiter: str, enclosure: str, escape: str
) -> list[str] | None:
    """Parse the next record from ``lines``.

    Only as many lines as the record needs are pulled from the iterator, so a
    quoted field spanning line breaks consumes the following lines too.

    Returns:
        The record's fields, ``[]`` for a blank line, or ``None`` when
        ``lines`` is exhausted

    Raises:
        csv.Error: If the record is malformed
    """
    reader = csv.reader(lines, **dialect_options(delimiter, enclosure, escape))
    return next(reader, None)


def format_record(
    fields: Iterable[Any], delimiter: str, enclosure: str, escape: str
) -> str:
    """Format ``fields`` as one newline-terminated record.

    Raises:
        csv.Error: If a field cannot be represented in the dialect
    """
    options = dialect_options(delimiter, enclosure, escape)
    # Escaping is done here, so the writer only has to quote. A "\r\n"
    # terminator makes it quote fields holding either line-break character.
    options.update(escapechar=None, lineterminator="\r\n")
    if escape and escape != enclosure:
        fields = [
            field.replace(escape, escape * 2) if isinstance(field, str) else field
            for field in fields
        ]

    buffer = io.StringIO()
    csv.writer(buffer, **options).writerow(fields)
    return buffer.getvalue()[:-2] + "\n"
