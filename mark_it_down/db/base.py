import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Text, Uuid

from mark_it_down.core.db import Base

# Материализованный путь: без ограничения длины, на Postgres с побайтовой сортировкой
PathType = Text().with_variant(Text(collation="C"), "postgresql")


class BaseModel(Base):
    __abstract__ = True

    uuid = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
