import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .core.config import get_settings
from .core.errors import BookshelfError
from .api import index as index_router
from .api import search as search_router
from .api import book as book_router

logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(title="Bookshelf", version="0.1.0")

app.include_router(index_router.router)
app.include_router(search_router.router)
app.include_router(book_router.router)


# Global error handler: 모든 도메인 에러는 500 + 에러 메시지 본문(plain text)
@app.exception_handler(BookshelfError)
async def bookshelf_error_handler(request: Request, exc: BookshelfError):
    logger.warning("%s %s failed: %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return PlainTextResponse(str(exc), status_code=500)


def run():
    import uvicorn

    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Listening on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
