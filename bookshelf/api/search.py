from typing import List

from fastapi import APIRouter, Depends, Query

from bookshelf.schemas.search import SearchResult
from bookshelf.services.classify import ClassifyClient, decode_search_results, get_client


router = APIRouter(tags=["search"])


@router.get("/search", response_model=List[SearchResult], summary="Classify 제목 검색")
def search_titles(
    search: str = Query("", description="제목 검색어 (빈 값도 그대로 전달)"),
    client: ClassifyClient = Depends(get_client),
):
    # TransportError/ReadError/DecodeError 는 main 의 핸들러에서 500 처리
    body = client.search_by_title(search)
    return decode_search_results(body)
