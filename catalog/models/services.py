from typing import Optional
from sqlmodel import Field
from sqlalchemy import UniqueConstraint

from catalog.schemas.services import ServiceFields


class ServiceRow(ServiceFields, table=True):
    __tablename__ = "services"
    __table_args__ = (
        UniqueConstraint("app_code", name="uq_service_app_code"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
