import logging

from fastapi import Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookshelf.core.errors import StorageError
from bookshelf.database import get_db
from bookshelf.models import Book

logger = logging.getLogger(__name__)


class BookStore:
    def __init__(self, db: Session):
        self.db = db

    def ping(self) -> None:
        try:
            self.db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def is_reachable(self) -> bool:
        try:
            self.ping()
        except StorageError:
            return False
        return True

    def insert_book(self, title: str, author: str, work_id: str, classification: str) -> Book:
        # 트랜잭션 묶음 없이 단건 insert + commit
        book = Book(title=title, author=author, work_id=work_id, classification=classification)
        try:
            self.db.add(book)
            self.db.commit()
            self.db.refresh(book)
        except SQLAlchemyError as e:
            logger.exception("books insert 실패 (owi=%s)", work_id)
            self.db.rollback()
            raise StorageError(str(e)) from e
        return book


def get_store(db: Session = Depends(get_db)) -> BookStore:
    return BookStore(db)
