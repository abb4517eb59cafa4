from __future__ import annotations

import logging
from typing import Optional

from ..db import ConnectionProvider
from ..domain.models import Body
from ..domain.validation import Clock, system_clock, validate_body
from ..errors import ContractViolationError, IllegalEntityError
from ..repository import body_repo
from .utils import EntityManagerBase, check_updates_count, single_row, transaction, translate_errors

logger = logging.getLogger(__name__)


class BodyManager(EntityManagerBase):
    """CRUD over the Body table.

    Every call takes one connection from the provider and closes it before
    returning. Writes run in an explicit transaction and are rolled back on
    any failure; validation and id checks happen before a connection is opened.
    """

    def __init__(self, clock: Clock = system_clock, conn_provider: Optional[ConnectionProvider] = None):
        super().__init__(conn_provider)
        self._clock = clock

    def find_all_bodies(self) -> list[Body]:
        self._check_provider()
        with translate_errors("Error when getting all bodies from DB", logger):
            with self._connect() as conn:
                rows = body_repo.list_all(conn)
        return [body_repo.row_to_body(r) for r in rows]

    def get_body(self, body_id: int) -> Optional[Body]:
        self._check_provider()
        if body_id is None:
            raise ContractViolationError("id is null")
        with translate_errors(f"Error when getting body with id = {body_id} from DB", logger):
            with self._connect() as conn:
                row = single_row(body_repo.find_by_id(conn, body_id), "bodies")
        return None if row is None else body_repo.row_to_body(row)

    def create_body(self, body: Body) -> None:
        self._check_provider()
        validate_body(body, self._clock)
        if body.id is not None:
            raise IllegalEntityError("body id is already set")
        with translate_errors("Error when inserting body into db", logger):
            with self._connect() as conn, transaction(conn):
                count, new_id = body_repo.insert_body(conn, body)
                check_updates_count(count, body, inserting=True)
        body.id = new_id
        logger.debug("Created body id=%s", new_id)

    def update_body(self, body: Body) -> None:
        self._check_provider()
        validate_body(body, self._clock)
        if body.id is None:
            raise IllegalEntityError("body id is null")
        with translate_errors("Error when updating body in the db", logger):
            with self._connect() as conn, transaction(conn):
                count = body_repo.update_body(conn, body)
                check_updates_count(count, body, inserting=False)
        logger.debug("Updated body id=%s", body.id)

    def delete_body(self, body: Body) -> None:
        self._check_provider()
        if body is None:
            raise ContractViolationError("body is null")
        if body.id is None:
            raise IllegalEntityError("body id is null")
        with translate_errors("Error when deleting body from the db", logger):
            with self._connect() as conn, transaction(conn):
                count = body_repo.delete_body(conn, body.id)
                check_updates_count(count, body, inserting=False)
        logger.debug("Deleted body id=%s", body.id)
