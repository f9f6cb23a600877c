from fastapi import APIRouter, Depends, Query, Response

from bookshelf.services.book_store import BookStore, get_store
from bookshelf.services.classify import ClassifyClient, decode_classified_work, get_client

router = APIRouter(prefix="/books", tags=["books"])


@router.get("/add", summary="owi로 Classify 조회 후 books 에 저장")
def add_book(
    id: str = Query("", description="OCLC work identifier (owi)"),
    client: ClassifyClient = Depends(get_client),
    store: BookStore = Depends(get_store),
):
    work = decode_classified_work(client.fetch_by_identifier(id))

    # 디코드와 DB 확인이 모두 통과해야 insert
    store.ping()
    store.insert_book(
        work.title,
        work.author,
        work.work_identifier,
        work.popular_classification_code,
    )
    return Response(status_code=200)
