"""Errors raised while fetching and parsing the notice board."""


class NoticeBoardError(Exception):
    """Base class for notice board failures."""


class NetworkError(NoticeBoardError):
    """Transport failure, timeout or non-success HTTP status."""


class DecodeError(NoticeBoardError):
    """Response body could not be decoded as text."""


class ParseError(NoticeBoardError):
    """The expected page structure could not be selected."""


class InvalidArticleId(NoticeBoardError, ValueError):
    """A detail link does not carry an ``articleNo`` parameter."""


class InvalidUrl(NoticeBoardError, ValueError):
    """A constructed URL is malformed."""
