"""
Record gateways for the two fixed tables, EMPPF1 and QCUSTCDT.

Table and column names are constants of this module; every value goes
through a bound parameter.  Each call is one autocommitted statement, so two
concurrent updates of the same key both succeed and the later one wins.
"""

from dataclasses import dataclass

from errors import NotFoundError
from services.rows import json_row, json_rows
from services.tables import MAX_ROWS


@dataclass(frozen=True)
class RecordGateway:
    table: str
    key: str
    columns: tuple[str, ...]
    label: str
    ordered: bool = False

    def _qualified(self, library: str) -> str:
        return f"{library}.{self.table}"

    def list_all(self, db, library: str) -> list[dict]:
        order = f" ORDER BY {self.key}" if self.ordered else ""
        rows = db.fetch_all(
            f"SELECT * FROM {self._qualified(library)}{order} "
            f"FETCH FIRST {MAX_ROWS} ROWS ONLY"
        )
        return json_rows(rows)

    def get(self, db, library: str, key_value) -> dict:
        rows = db.fetch_all(
            f"SELECT * FROM {self._qualified(library)} WHERE {self.key} = ?",
            (key_value,),
        )
        if not rows:
            raise NotFoundError(f"{self.label} not found")
        return json_row(rows[0])

    def create(self, db, library: str, record: dict) -> None:
        names = (self.key, *self.columns)
        placeholders = ", ".join("?" for _ in names)
        db.execute(
            f"INSERT INTO {self._qualified(library)} ({', '.join(names)}) "
            f"VALUES ({placeholders})",
            tuple(record[name] for name in names),
        )

    def update(self, db, library: str, key_value, fields: dict) -> None:
        assignments = ", ".join(f"{col} = ?" for col in self.columns)
        count = db.execute(
            f"UPDATE {self._qualified(library)} SET {assignments} WHERE {self.key} = ?",
            (*(fields[col] for col in self.columns), key_value),
        )
        if count == 0:
            raise NotFoundError(f"{self.label} not found")

    def delete(self, db, library: str, key_value) -> None:
        count = db.execute(
            f"DELETE FROM {self._qualified(library)} WHERE {self.key} = ?",
            (key_value,),
        )
        if count == 0:
            raise NotFoundError(f"{self.label} not found")


EMPLOYEES = RecordGateway(
    table="EMPPF1",
    key="EMPID",
    columns=("EMPNAME", "EMPCITY", "EMPSTATE"),
    label="Employee",
    ordered=True,
)

CUSTOMERS = RecordGateway(
    table="QCUSTCDT",
    key="CUSNUM",
    columns=(
        "LSTNAM",
        "INIT",
        "STREET",
        "CITY",
        "STATE",
        "ZIPCOD",
        "CDTLMT",
        "CHGCOD",
        "BALDUE",
        "CDTDUE",
    ),
    label="Customer",
)
