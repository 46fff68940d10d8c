class NftLedgerError(Exception):
    """
    The base exception for the ledger. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class DatabaseDriverNotFound(NftLedgerError):
    """
    Could not find the specified database driver when
    looking for it

    :ivar driver: The name of the database driver the
                  the user attempted to load
    :ivar known_drivers: The list of known drivers
                         currently supported
    """
    fmt = "Unknown database driver '{driver}', known drivers '{known_drivers}'"


class LedgerError(NftLedgerError):
    """
    A ledger operation was rejected. The ledger state is left
    exactly as it was before the call.

    :ivar kind: One of ERROR_KINDS
    """
    fmt = 'Ledger operation rejected'

    @property
    def kind(self):
        return type(self).__name__


class NotOwner(LedgerError):
    """
    :ivar token: The token id
    :ivar principal: The principal that is not the owner
    """
    fmt = "'{principal}' is not the owner of token {token}"


class NotApproved(LedgerError):
    fmt = "'{caller}' is not approved to transfer token {token}"


class TokenExists(LedgerError):
    fmt = 'Token {token} already exists'


class TokenNotFound(LedgerError):
    fmt = 'Token {token} does not exist'


class CannotInsert(LedgerError):
    fmt = 'Token {token} already has an active approval'


class CannotFetchValue(LedgerError):
    """
    A balance that must exist could not be read. This only happens
    when storage no longer satisfies the ledger invariants.

    :ivar principal: The principal whose balance is broken
    """
    fmt = "Balance of '{principal}' is missing or exhausted"


class NotAllowed(LedgerError):
    """
    :ivar reason: Which structural rule was broken
    """
    fmt = 'Operation not allowed: {reason}'


ERROR_KINDS = tuple(e.__name__ for e in (
    NotOwner,
    NotApproved,
    TokenExists,
    TokenNotFound,
    CannotInsert,
    CannotFetchValue,
    NotAllowed
))
