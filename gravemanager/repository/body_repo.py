from __future__ import annotations

import datetime as dt
from sqlite3 import Connection, Row
from typing import Optional

from ..domain.models import Body, Gender
from ..errors import ServiceFailureError

_SELECT = "SELECT id, name, gender, born, died, vampire FROM Body"


def list_all(conn: Connection) -> list[Row]:
    return conn.execute(_SELECT).fetchall()


def find_by_id(conn: Connection, body_id: int) -> list[Row]:
    return conn.execute(_SELECT + " WHERE id = ?", (body_id,)).fetchall()


def insert_body(conn: Connection, body: Body) -> tuple[int, int]:
    """Returns (affected rows, generated id)."""
    cur = conn.execute(
        "INSERT INTO Body(name, gender, born, died, vampire) VALUES(?,?,?,?,?)",
        (body.name, to_db_gender(body.gender), to_db_date(body.born), to_db_date(body.died),
         1 if body.vampire else 0),
    )
    return cur.rowcount, int(cur.lastrowid)


def update_body(conn: Connection, body: Body) -> int:
    cur = conn.execute(
        "UPDATE Body SET name = ?, gender = ?, born = ?, died = ?, vampire = ? WHERE id = ?",
        (body.name, to_db_gender(body.gender), to_db_date(body.born), to_db_date(body.died),
         1 if body.vampire else 0, body.id),
    )
    return cur.rowcount


def delete_body(conn: Connection, body_id: int) -> int:
    return conn.execute("DELETE FROM Body WHERE id = ?", (body_id,)).rowcount


def row_to_body(row: Row) -> Body:
    return Body(
        id=int(row["id"]),
        name=row["name"],
        gender=to_gender(row["gender"]),
        born=to_date(row["born"]),
        died=to_date(row["died"]),
        vampire=int(row["vampire"] or 0) != 0,
    )


def to_gender(value: Optional[str]) -> Optional[Gender]:
    if value is None:
        return None
    try:
        return Gender[value]
    except KeyError as ex:
        raise ServiceFailureError(f"Invalid gender stored in DB: {value!r}") from ex


def to_db_gender(gender: Optional[Gender]) -> Optional[str]:
    return None if gender is None else gender.name


def to_date(value) -> Optional[dt.date]:
    if value is None:
        return None
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value))
    except ValueError as ex:
        raise ServiceFailureError(f"Invalid date stored in DB: {value!r}") from ex


def to_db_date(value: Optional[dt.date]) -> Optional[str]:
    return None if value is None else value.isoformat()
