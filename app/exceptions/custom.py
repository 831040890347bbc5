class ListingSourceError(Exception):
    def __init__(self, message: str, path: str | None = None):
        self.message = message
        self.path = path
        super().__init__(message)


class QueryTooLongError(Exception):
    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"Query is {length} characters, limit is {limit}")
