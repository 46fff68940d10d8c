"""Non-fungible token ownership ledger.

Tracks who owns each token id, who may transfer a single token on the owner's
behalf, and which operators may move everything an owner holds. Every
mutating operation takes the calling principal explicitly, checks all of its
preconditions before the first write and then reports what happened to its
event sink.
"""

from nftledger.db.driver import LedgerDriver
from nftledger.db.orm import Hash
from nftledger.events import EventLog, Transfer, Approval, ApprovalForAll, Mint
from nftledger.exceptions import (
    NotOwner, NotApproved, TokenExists, TokenNotFound, CannotInsert, CannotFetchValue, NotAllowed
)
from nftledger import config


def export(f):
    setattr(f, config.EXPORT_ATTRIBUTE, True)
    return f


def is_exported(f):
    return getattr(f, config.EXPORT_ATTRIBUTE, False)


class Ledger:
    def __init__(self, driver: LedgerDriver=None, sink=None, name=config.LEDGER_NAME):
        self.name = name
        self.driver = driver or LedgerDriver()
        self.sink = sink if sink is not None else EventLog()

        self.token_owner = Hash(name, config.TOKEN_OWNER, driver=self.driver)
        self.token_approvals = Hash(name, config.TOKEN_APPROVALS, driver=self.driver)
        self.owned_tokens_count = Hash(name, config.OWNED_TOKENS_COUNT, driver=self.driver)
        self.operator_approvals = Hash(name, config.OPERATOR_APPROVALS, driver=self.driver)
        self.token_uris = Hash(name, config.TOKEN_URIS, driver=self.driver)

    # Queries

    @export
    def balance_of(self, owner) -> int:
        if not _is_principal(owner):
            return 0
        return self.owned_tokens_count.get(owner) or 0

    @export
    def owner_of(self, token):
        _validate_token(token)
        return self.token_owner.get(token)

    @export
    def get_approved(self, token):
        _validate_token(token)
        return self.token_approvals.get(token)

    @export
    def is_approved_for_all(self, owner, operator) -> bool:
        if not (_is_principal(owner) and _is_principal(operator)):
            return False
        return self.operator_approvals.contains((owner, operator))

    @export
    def token_uri(self, token):
        _validate_token(token)
        return self.token_uris.get(token)

    # Operations

    @export
    def mint(self, caller, token, uri):
        _validate_token(token)
        _validate_uri(uri)
        self._check_can_add(caller, token)

        self._add_token_to(caller, token)
        self.token_uris.insert(token, uri)

        self.sink.emit(Mint(to=caller, token=token, uri=uri))
        self.sink.emit(Transfer(from_=config.NULL_PRINCIPAL, to=caller, token=token))

    @export
    def burn(self, caller, token):
        _validate_token(token)
        owner = self._owner_or_raise(token)

        # Approvals and operators don't count here, only the owner may destroy a token
        if owner != caller:
            raise NotOwner(principal=caller, token=token)

        self._check_can_remove(owner)

        self.token_approvals.remove(token)
        self._remove_token_from(owner, token)
        self.token_uris.remove(token)

        self.sink.emit(Transfer(from_=caller, to=config.NULL_PRINCIPAL, token=token))

    @export
    def approve(self, caller, token, to):
        _validate_token(token)
        owner = self._owner_or_raise(token)

        if not (owner == caller or self.is_approved_for_all(owner, caller)):
            raise NotAllowed(reason="'{}' may not approve token {}".format(caller, token))

        if to == config.NULL_PRINCIPAL:
            raise NotAllowed(reason='cannot approve the null principal')

        if not _is_principal(to):
            raise NotAllowed(reason="'{}' is not a valid principal".format(to))

        if self.token_approvals.contains(token):
            raise CannotInsert(token=token)

        self.token_approvals.insert(token, to)

        self.sink.emit(Approval(from_=caller, to=to, token=token))

    @export
    def set_approval_for_all(self, caller, operator, approved: bool):
        if operator == caller:
            raise NotAllowed(reason='cannot make yourself your own operator')

        if operator == config.NULL_PRINCIPAL:
            raise NotAllowed(reason='the null principal cannot be an operator')

        if not (_is_principal(caller) and _is_principal(operator)):
            raise NotAllowed(reason="'{}' and '{}' must both be valid principals".format(caller, operator))

        if approved:
            self.operator_approvals.insert((caller, operator), True)
        else:
            self.operator_approvals.remove((caller, operator))

        self.sink.emit(ApprovalForAll(owner=caller, operator=operator, approved=approved))

    @export
    def transfer(self, caller, to, token):
        self._transfer_token_from(caller, caller, to, token)

    @export
    def transfer_from(self, caller, from_, to, token):
        self._transfer_token_from(caller, from_, to, token)

    # Internals

    def _transfer_token_from(self, caller, from_, to, token):
        _validate_token(token)
        owner = self._owner_or_raise(token)

        if not self._approved_or_owner(caller, token, owner):
            raise NotApproved(caller=caller, token=token)

        # Only checked once the caller is known to be allowed to move the token at all
        if owner != from_:
            raise NotOwner(principal=from_, token=token)

        if to == config.NULL_PRINCIPAL:
            raise NotAllowed(reason='cannot transfer to the null principal')

        if not _is_principal(to):
            raise NotAllowed(reason="'{}' is not a valid principal".format(to))

        self._check_can_remove(from_)

        self.token_approvals.remove(token)
        self._remove_token_from(from_, token)
        self._add_token_to(to, token)

        self.sink.emit(Transfer(from_=from_, to=to, token=token))

    def _owner_or_raise(self, token):
        owner = self.token_owner.get(token)
        if owner is None:
            raise TokenNotFound(token=token)
        return owner

    def _approved_or_owner(self, principal, token, owner) -> bool:
        return principal != config.NULL_PRINCIPAL and (
            principal == owner or
            self.token_approvals.get(token) == principal or
            self.is_approved_for_all(owner, principal)
        )

    def _check_can_add(self, to, token):
        if self.token_owner.contains(token):
            raise TokenExists(token=token)

        if to == config.NULL_PRINCIPAL:
            raise NotAllowed(reason='the null principal cannot own tokens')

        if not _is_principal(to):
            raise NotAllowed(reason="'{}' is not a valid principal".format(to))

    def _check_can_remove(self, owner):
        count = self.owned_tokens_count.get(owner)
        if count is None or count < 1:
            raise CannotFetchValue(principal=owner)

    def _add_token_to(self, to, token):
        self._check_can_add(to, token)

        count = self.owned_tokens_count.get(to) or 0
        self.owned_tokens_count.insert(to, count + 1)
        self.token_owner.insert(token, to)

    def _remove_token_from(self, owner, token):
        if not self.token_owner.contains(token):
            raise TokenNotFound(token=token)

        self._check_can_remove(owner)

        count = self.owned_tokens_count.get(owner)
        self.owned_tokens_count.insert(owner, count - 1)
        self.token_owner.remove(token)

    def exported_functions(self):
        return sorted(name for name in dir(type(self)) if is_exported(getattr(type(self), name)))


def _validate_token(token):
    assert isinstance(token, int) and not isinstance(token, bool), 'Token id must be an integer, got {}.'.format(
        type(token).__name__
    )
    assert 0 <= token <= config.MAX_TOKEN_ID, 'Token id {} out of range. Max is {}.'.format(
        token, config.MAX_TOKEN_ID
    )


def _validate_uri(uri):
    assert isinstance(uri, str), 'Token uri must be a string, got {}.'.format(type(uri).__name__)


def _is_principal(principal) -> bool:
    # Principals end up as key components, so they can't carry the key delimiters
    return isinstance(principal, str) and 0 < len(principal) <= config.MAX_PRINCIPAL_SIZE and \
        config.DELIMITER not in principal and config.INDEX_SEPARATOR not in principal
