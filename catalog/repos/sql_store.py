import logging
import threading
from typing import List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from catalog.errors import ServiceNotFoundError, ServiceValidationError
from catalog.models.services import ServiceRow
from catalog.repos.base import ServiceStore
from catalog.schemas.services import SERVICE_FIELDS, ServiceCreate, ServiceFields, ServiceRead, ServiceUpdate
from catalog.services.validation import collect_problems


logger = logging.getLogger(__name__)

# SQLite INTEGER PRIMARY KEY is a signed 64-bit value
MAX_ROW_ID = 2**63 - 1


def to_read(row: ServiceRow) -> ServiceRead:
    return ServiceRead(id=row.id, **{name: getattr(row, name) for name in SERVICE_FIELDS})


class SqlServiceStore(ServiceStore):
    """Catalog backed by a SQLModel engine; ids come from the primary key."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.lock = threading.Lock()

    def load(self) -> None:
        SQLModel.metadata.create_all(self.engine, tables=[ServiceRow.__table__])

    def _get_row(self, session: Session, service_id: int) -> Optional[ServiceRow]:
        if not -MAX_ROW_ID - 1 <= service_id <= MAX_ROW_ID:
            return None
        return session.get(ServiceRow, service_id)

    def _same_code(self, session: Session, fields: ServiceFields) -> List[ServiceRead]:
        statement = select(ServiceRow).where(ServiceRow.app_code == fields.app_code)
        return [to_read(row) for row in session.exec(statement).all()]

    def add(self, fields: ServiceCreate) -> ServiceRead:
        with self.lock, Session(self.engine) as session:
            problems = collect_problems(fields, self._same_code(session, fields))
            if problems:
                raise ServiceValidationError(problems)

            row = ServiceRow(**fields.model_dump(include=set(SERVICE_FIELDS)))
            try:
                session.add(row)
                session.commit()
                session.refresh(row)
            except IntegrityError:
                session.rollback()
                raise ServiceValidationError([f"App Code '{fields.app_code}' is already in use"])

            service = to_read(row)

        logger.info("Service added: id=%s app_code=%s", service.id, service.app_code)
        return service

    def update(self, service_id: int, fields: ServiceUpdate) -> ServiceRead:
        with self.lock, Session(self.engine) as session:
            row = self._get_row(session, service_id)
            if not row:
                raise ServiceNotFoundError(service_id)

            problems = collect_problems(fields, self._same_code(session, fields), exclude_id=service_id)
            if problems:
                raise ServiceValidationError(problems)

            for name in SERVICE_FIELDS:
                setattr(row, name, getattr(fields, name))
            try:
                session.add(row)
                session.commit()
                session.refresh(row)
            except IntegrityError:
                session.rollback()
                raise ServiceValidationError([f"App Code '{fields.app_code}' is already in use"])

            service = to_read(row)

        logger.info("Service updated: id=%s app_code=%s", service.id, service.app_code)
        return service

    def all(self) -> List[ServiceRead]:
        with Session(self.engine) as session:
            rows = session.exec(select(ServiceRow).order_by(ServiceRow.id)).all()
            return [to_read(row) for row in rows]

    def find_by_id(self, service_id: int) -> Optional[ServiceRead]:
        with Session(self.engine) as session:
            row = self._get_row(session, service_id)
            return to_read(row) if row else None
