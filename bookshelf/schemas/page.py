from pydantic import BaseModel


class IndexPage(BaseModel):
    name: str
    db_status: bool = False
