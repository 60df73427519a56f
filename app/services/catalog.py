"""Service catalog store: ordered listing, all-or-nothing bulk replace, and delete."""

import logging
from collections.abc import Iterable

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import CatalogUpdateFailed, ServiceNotFound
from app.models import Service
from app.schemas.catalog import ServiceUpsert

logger = logging.getLogger(__name__)


class ServiceCatalogStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self) -> list[Service]:
        """Services ordered by display_order (then id)."""
        return (
            self.session.query(Service)
            .order_by(Service.display_order.asc(), Service.id.asc())
            .all()
        )

    def bulk_replace(self, items: Iterable[ServiceUpsert]) -> int:
        """
        Upsert every item by id inside one transaction.

        Items without an id, or with an id not in the table, are inserted;
        existing rows have every field overwritten. On any database error the
        whole batch is rolled back and CatalogUpdateFailed is raised.
        Returns the number of items applied.
        """
        count = 0
        try:
            for item in items:
                inserted_with_id = self._upsert(item)
                # Flush per item so a failing row aborts before later rows are staged.
                self.session.flush()
                if inserted_with_id:
                    self._sync_id_sequence()
                count += 1
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Service bulk replace rolled back after %s item(s): %s", count, type(e).__name__)
            raise CatalogUpdateFailed() from e
        logger.info("Service catalog replaced: %s item(s) upserted", count)
        return count

    def _upsert(self, item: ServiceUpsert) -> bool:
        """Stage one item. Returns True when a row was inserted with a client-chosen id."""
        service = self.session.get(Service, item.id) if item.id is not None else None
        inserted_with_id = service is None and item.id is not None
        if service is None:
            service = Service(id=item.id)
            self.session.add(service)
        service.name = item.name
        service.title = item.title
        service.display_order = item.display_order
        return inserted_with_id

    def _sync_id_sequence(self) -> None:
        """
        Move the Postgres id sequence past the highest id so later inserts
        without an id cannot collide. SQLite assigns max(id)+1 on its own.
        """
        if self.session.get_bind().dialect.name != "postgresql":
            return
        self.session.execute(
            text(
                "SELECT setval(pg_get_serial_sequence('services', 'id'), "
                "(SELECT COALESCE(MAX(id), 1) FROM services))"
            )
        )

    def delete(self, service_id: int) -> None:
        service = self.session.get(Service, service_id)
        if service is None:
            raise ServiceNotFound()
        self.session.delete(service)
        self.session.commit()
        logger.info("Deleted service id=%s", service_id)
