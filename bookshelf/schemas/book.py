from pydantic import BaseModel


class ClassifiedWork(BaseModel):
    title: str = ""
    author: str = ""
    work_identifier: str = ""
    # DDC mostPopular sfa 값
    popular_classification_code: str = ""
