# api/errors.py


class MarketplaceError(Exception):
    """Base class for errors raised by the handlers."""


class NotFoundError(MarketplaceError):
    """An update targeted a row that does not exist."""


class ReferentialIntegrityError(MarketplaceError):
    """A dependent row references a missing or mismatched parent."""
