import logging
import xml.etree.ElementTree as ET
from typing import List, Optional
from urllib.parse import quote_plus

import httpx

from bookshelf.core.config import get_settings
from bookshelf.core.errors import DecodeError, ReadError, TransportError
from bookshelf.schemas.book import ClassifiedWork
from bookshelf.schemas.search import SearchResult

logger = logging.getLogger(__name__)

# Classify 응답은 기본 namespace(http://classify.oclc.org)를 달고 오므로 {*}로 매칭
_WORKS_PATH = "{*}works/{*}work"
_WORK_PATH = "{*}work"
_MOST_POPULAR_PATH = "{*}recommendations/{*}ddc/{*}mostPopular"


class ClassifyClient:
    BASE_URL = "http://classify.oclc.org/classify2/Classify"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_s: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url or self.BASE_URL
        self.timeout_s = timeout_s
        self.transport = transport

    def fetch_raw(self, url: str) -> bytes:
        logger.debug("GET %s", url)
        try:
            with httpx.Client(
                timeout=self.timeout_s,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                # 상태 코드는 보지 않음. 본문 해석은 디코더 몫
                with client.stream("GET", url) as r:
                    try:
                        return r.read()
                    except httpx.HTTPError as e:
                        # 헤더 수신 이후 본문을 다 읽지 못한 경우
                        raise ReadError(str(e) or e.__class__.__name__) from e
        except httpx.HTTPError as e:
            raise TransportError(str(e) or e.__class__.__name__) from e

    def search_by_title(self, query: str) -> bytes:
        return self.fetch_raw(f"{self.base_url}?summary=true&title={quote_plus(query)}")

    def fetch_by_identifier(self, owi: str) -> bytes:
        # summary=tre 는 기존 호출 그대로 유지
        return self.fetch_raw(f"{self.base_url}?summary=tre&owi={quote_plus(owi)}")


def _first_root(parser: ET.XMLPullParser) -> Optional[ET.Element]:
    root = None
    for event, elem in parser.read_events():
        if event == "start" and root is None:
            root = elem
        elif event == "end" and elem is root:
            return root
    return None


def _parse(body: bytes) -> ET.Element:
    # 첫 루트 요소가 닫히면 거기서 끝. 뒤에 붙은 바이트는 무시
    parser = ET.XMLPullParser(events=("start", "end"))
    try:
        parser.feed(body)
        root = _first_root(parser)
        if root is None:
            parser.close()
    except ET.ParseError as e:
        raise DecodeError(str(e)) from e
    if root is None:
        raise DecodeError("no root element")
    return root


def decode_search_results(body: bytes) -> List[SearchResult]:
    root = _parse(body)
    return [
        SearchResult(
            title=work.get("title", ""),
            author=work.get("author", ""),
            publication_year=work.get("hyr", ""),
            work_identifier=work.get("owi", ""),
        )
        for work in root.findall(_WORKS_PATH)
    ]


def decode_classified_work(body: bytes) -> ClassifiedWork:
    root = _parse(body)
    work = root.find(_WORK_PATH)
    most_popular = root.find(_MOST_POPULAR_PATH)
    # 요소가 없으면 빈 문자열 (에러 아님)
    attrs = work.attrib if work is not None else {}
    return ClassifiedWork(
        title=attrs.get("title", ""),
        author=attrs.get("author", ""),
        work_identifier=attrs.get("owi", ""),
        popular_classification_code=most_popular.get("sfa", "") if most_popular is not None else "",
    )


def get_client() -> ClassifyClient:
    settings = get_settings()
    return ClassifyClient(settings.classify_api_base, timeout_s=settings.classify_timeout_s)
