"""Load tables from CSV files."""

import csv
import logging
from pathlib import Path
from typing import Optional, Union

from tabledoc.models import Table


logger = logging.getLogger(__name__)


def load_csv(
    path: Union[str, Path],
    name: Optional[str] = None,
    encoding: str = "utf-8-sig",
    delimiter: str = ",",
) -> Table:
    """Read a CSV file into a Table.

    The header row provides the column names and every cell is kept as text,
    empty cells included.

    Args:
        path: CSV file to read
        name: Table name, defaults to the file stem
        encoding: File encoding; the default also strips a UTF-8 byte order mark
        delimiter: Field delimiter

    Returns:
        Table with TEXT columns

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a record has more or fewer fields than the header
    """
    path = Path(path)
    table = Table(name or path.stem)

    with open(path, "r", encoding=encoding, newline="") as f:
        reader = csv.reader(f, delimiter=delimiter)

        header = next(reader, None)
        if header is None:
            logger.warning(f"CSV file {path} is empty")
            return table

        for column_name in header:
            table.add_column(column_name, "TEXT")

        for record in reader:
            if not record:
                continue
            if len(record) != len(header):
                raise ValueError(
                    f"{path}:{reader.line_num}: expected {len(header)} fields, "
                    f"got {len(record)}"
                )
            table.add_row(record)

    logger.debug(f"Loaded {len(table.rows)} row(s) from {path}")
    return table
