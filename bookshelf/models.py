from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Book(Base):
    __tablename__ = "books"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255))
    author = Column(String(255))
    # OCLC owi. 중복 허용 (unique 제약 없음)
    work_id = Column("id", String(64))
    classification = Column(String(32))
