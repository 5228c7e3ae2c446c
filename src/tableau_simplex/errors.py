class InvalidDimensionsError(ValueError):
    """Raised when a problem's declared sizes disagree with its data."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
