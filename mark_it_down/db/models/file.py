from sqlalchemy import Column, String, Text, ForeignKey, Uuid

from mark_it_down.db.base import BaseModel, PathType


class File(BaseModel):
    __tablename__ = "files"

    owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.uuid"), index=True, nullable=False)
    folder_id = Column(Uuid(as_uuid=True), index=True, nullable=True)
    name = Column(Text, nullable=False)
    content = Column(Text, nullable=False, default="")
    type = Column(String(16), nullable=False, default="text")
    path = Column(PathType, nullable=False)
