from sqlalchemy import BigInteger, Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from app.db.base import Base

class Archive(Base):
    __tablename__ = "archive"

    # SQLite only autoincrements a plain INTEGER primary key
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    tag = Column(String, nullable=False, index=True)
    comment = Column(Text, nullable=True)
    attachment = Column(Text, nullable=True)
    # Not unique: an alias may shadow another post's alias or even an id
    alias = Column(String, nullable=True)
