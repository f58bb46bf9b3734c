class DeepSkyError(Exception):
    """Base exception for deepsky errors."""


class FeedError(DeepSkyError):
    """Raised when raw sun/moon ephemeris cannot be obtained from a feed."""

    code = "feed_error"


class FeedUnfetchable(FeedError):
    """Raised when the feed host cannot be reached (no network, timeout)."""

    code = "unfetchable"


class FeedUndecodable(FeedError):
    """Raised when a payload does not have the expected shape."""

    code = "undecodable"


class FeedUnaddressable(FeedError):
    """Raised when a request URL cannot be built from the given parameters."""

    code = "unaddressable"


class FeedOutOfRange(FeedError):
    """Raised when the requested date is outside the feed's supported window."""

    code = "out_of_range"


class FeedEmptyResult(FeedError):
    """Raised when the feed answered but carried no usable instants."""

    code = "empty_result"
