class RetrievalError(Exception):
    """Storage-layer failure while reading data for a response."""

    def __init__(self, message: str = "Failed to fetch data"):
        self.message = message
        super().__init__(message)


class CartError(Exception):
    """Cart business rule violation (availability, stock, ownership)."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
