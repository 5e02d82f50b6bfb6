class InvalidArgument(ValueError):
    """Malformed input: blank currency code, negative amount, non-positive TTL."""


class RateFetchFailed(Exception):
    """The rate source failed to produce a rate for ``pair``.

    The original error is kept on ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, pair, cause: BaseException):
        super().__init__(f"Failed to fetch rate {pair}: {cause}")
        self.pair = pair
        self.cause = cause
