from pydantic import BaseModel


class SearchResult(BaseModel):
    title: str = ""
    author: str = ""
    publication_year: str = ""  # hyr
    work_identifier: str = ""  # owi
