from __future__ import annotations

import logging
from typing import Optional

from ..domain.models import Grave
from ..domain.validation import validate_grave
from ..errors import ContractViolationError, IllegalEntityError
from ..repository import grave_repo
from .utils import EntityManagerBase, check_updates_count, single_row, transaction, translate_errors

logger = logging.getLogger(__name__)


class GraveManager(EntityManagerBase):
    """CRUD over the Grave table, same call protocol as BodyManager."""

    def find_all_graves(self) -> list[Grave]:
        self._check_provider()
        with translate_errors("Error when getting all graves from DB", logger):
            with self._connect() as conn:
                rows = grave_repo.list_all(conn)
        return [grave_repo.row_to_grave(r) for r in rows]

    def get_grave(self, grave_id: int) -> Optional[Grave]:
        self._check_provider()
        if grave_id is None:
            raise ContractViolationError("id is null")
        with translate_errors(f"Error when getting grave with id = {grave_id} from DB", logger):
            with self._connect() as conn:
                row = single_row(grave_repo.find_by_id(conn, grave_id), "graves")
        return None if row is None else grave_repo.row_to_grave(row)

    def create_grave(self, grave: Grave) -> None:
        self._check_provider()
        validate_grave(grave)
        if grave.id is not None:
            raise IllegalEntityError("grave id is already set")
        with translate_errors("Error when inserting grave into db", logger):
            with self._connect() as conn, transaction(conn):
                count, new_id = grave_repo.insert_grave(conn, grave)
                check_updates_count(count, grave, inserting=True)
        grave.id = new_id
        logger.debug("Created grave id=%s", new_id)

    def update_grave(self, grave: Grave) -> None:
        self._check_provider()
        validate_grave(grave)
        if grave.id is None:
            raise IllegalEntityError("grave id is null")
        with translate_errors("Error when updating grave in the db", logger):
            with self._connect() as conn, transaction(conn):
                count = grave_repo.update_grave(conn, grave)
                check_updates_count(count, grave, inserting=False)
        logger.debug("Updated grave id=%s", grave.id)

    def delete_grave(self, grave: Grave) -> None:
        self._check_provider()
        if grave is None:
            raise ContractViolationError("grave is null")
        if grave.id is None:
            raise IllegalEntityError("grave id is null")
        with translate_errors("Error when deleting grave from the db", logger):
            with self._connect() as conn, transaction(conn):
                count = grave_repo.delete_grave(conn, grave.id)
                check_updates_count(count, grave, inserting=False)
        logger.debug("Deleted grave id=%s", grave.id)
