from sqlalchemy import Column, Text, ForeignKey, Uuid

from mark_it_down.db.base import BaseModel, PathType


class Folder(BaseModel):
    __tablename__ = "folders"

    owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.uuid"), index=True, nullable=False)
    name = Column(Text, nullable=False)
    # без внешнего ключа: дочерние папки переживают удаление родителя
    parent_id = Column(Uuid(as_uuid=True), nullable=True)
    path = Column(PathType, nullable=False)
