from __future__ import annotations

from sqlite3 import Connection, Row

from ..domain.models import Grave

_SELECT = "SELECT id, col_no, row_no, capacity, note FROM Grave"


def list_all(conn: Connection) -> list[Row]:
    return conn.execute(_SELECT).fetchall()


def find_by_id(conn: Connection, grave_id: int) -> list[Row]:
    return conn.execute(_SELECT + " WHERE id = ?", (grave_id,)).fetchall()


def insert_grave(conn: Connection, grave: Grave) -> tuple[int, int]:
    cur = conn.execute(
        "INSERT INTO Grave(col_no, row_no, capacity, note) VALUES(?,?,?,?)",
        (grave.column, grave.row, grave.capacity, grave.note),
    )
    return cur.rowcount, int(cur.lastrowid)


def update_grave(conn: Connection, grave: Grave) -> int:
    cur = conn.execute(
        "UPDATE Grave SET col_no = ?, row_no = ?, capacity = ?, note = ? WHERE id = ?",
        (grave.column, grave.row, grave.capacity, grave.note, grave.id),
    )
    return cur.rowcount


def delete_grave(conn: Connection, grave_id: int) -> int:
    return conn.execute("DELETE FROM Grave WHERE id = ?", (grave_id,)).rowcount


def row_to_grave(row: Row) -> Grave:
    return Grave(
        id=int(row["id"]),
        column=int(row["col_no"]),
        row=int(row["row_no"]),
        capacity=int(row["capacity"]),
        note=row["note"],
    )
