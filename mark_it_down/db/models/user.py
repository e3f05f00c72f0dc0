from sqlalchemy import Column, String, Text

from mark_it_down.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    email = Column(Text, unique=True, index=True, nullable=False)
    # пустая строка у аккаунтов, созданных через GitHub
    password_hash = Column(String(255), nullable=False, default="")
    name = Column(Text, nullable=False, default="")
    github_username = Column(Text, nullable=True)
    github_access_token = Column(Text, nullable=True)
