from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from .core.config import get_settings

# 프로세스당 엔진 하나. 커넥션 풀은 SQLAlchemy가 관리.
settings = get_settings()
DATABASE_URL = settings.database_url

# sqlite는 threadpool에서 돌아가는 핸들러끼리 커넥션을 공유하므로 check_same_thread 해제
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
	DATABASE_URL,
	echo=settings.sql_echo,
	connect_args=connect_args,
	future=True,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db() -> Generator[Session, None, None]:
	db = SessionLocal()
	try:
		yield db
	finally:
		db.close()
