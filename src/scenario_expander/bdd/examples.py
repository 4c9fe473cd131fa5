import re
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from ..core.exceptions import InvariantViolationError
from .model import ExampleTable

logger = logging.getLogger(__name__)


@dataclass
class ExampleData:
    """
    Row dataset of a scenario: one mapping of column title to cell value
    per data row of its example tables.
    """
    data: List[Dict[str, str]] = field(default_factory=list)

    @classmethod
    def from_tables(cls, tables: Iterable[ExampleTable], scenario_name: str = "") -> "ExampleData":
        """
        Stack all example tables under the first row as title row.

        Args:
            tables: Example tables of one scenario, in document order
            scenario_name: Used in error messages only

        Returns:
            ExampleData, empty when there are no data rows

        Raises:
            InvariantViolationError: if any two rows differ in width
        """
        rows = [list(row) for table in tables for row in table.rows]
        if not rows:
            return cls()

        width = len(rows[0])
        for index, row in enumerate(rows):
            if len(row) != width:
                raise InvariantViolationError(
                    f"Example row {index} of scenario '{scenario_name}' has {len(row)} cells, "
                    f"expected {width}"
                )

        titles, values = rows[0], rows[1:]
        if len(set(titles)) != len(titles):
            logger.debug(f"Duplicate example titles in '{scenario_name}', last column wins")

        data = []
        for value in values:
            row_data = {}
            for i, title in enumerate(titles):
                row_data[title] = value[i]
            data.append(row_data)

        return cls(data)

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self):
        return iter(self.data)


def substitute_placeholders(text: str, row: Dict[str, str]) -> str:
    """
    Replace every ``<title>`` in text with the row value for that title.

    One pass, longest title first; inserted values are not scanned again.
    Tokens without a matching title are left untouched.
    """
    if not row:
        return text

    titles = sorted(row, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(f"<{title}>") for title in titles))

    return pattern.sub(lambda match: row[match.group(0)[1:-1]], text)
