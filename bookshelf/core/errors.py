class BookshelfError(Exception):
    """Base class for failures surfaced to the HTTP client as a 500."""


class TransportError(BookshelfError):
    pass


class ReadError(BookshelfError):
    pass


class DecodeError(BookshelfError):
    pass


class StorageError(BookshelfError):
    pass


class RenderError(BookshelfError):
    pass
