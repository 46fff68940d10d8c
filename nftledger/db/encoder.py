import json
from nftledger.config import INDEX_SEPARATOR, DELIMITER

# Ledger values are strings, ints and flags, all of which JSON holds natively.


def encode(data):
    return json.dumps(data, separators=(',', ':'))


def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data)
    except json.decoder.JSONDecodeError:
        return None


def make_key(contract, variable, args=[]):
    contract_variable = INDEX_SEPARATOR.join((contract, variable))
    if args:
        return DELIMITER.join((contract_variable, *[str(arg) for arg in args]))
    return contract_variable
