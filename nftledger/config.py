import os

DB_TYPE = os.getenv('NFTLEDGER_DB_TYPE', 'memory')

MONGO_URL = os.getenv('NFTLEDGER_MONGO_URL', 'mongodb://localhost:27017')
MONGO_DB = os.getenv('NFTLEDGER_MONGO_DB', 'nftledger')
MONGO_COLLECTION = os.getenv('NFTLEDGER_MONGO_COLLECTION', 'state')

LEDGER_NAME = os.getenv('NFTLEDGER_NAME', 'erc721')

DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

# Mapping names as they appear in storage keys
TOKEN_OWNER = 'token_owner'
TOKEN_APPROVALS = 'token_approvals'
OWNED_TOKENS_COUNT = 'owned_tokens_count'
OPERATOR_APPROVALS = 'operator_approvals'
TOKEN_URIS = 'token_uris'

# "No one". Only ever shows up in events.
NULL_PRINCIPAL = '0' * 64

# Token ids are unsigned 32 bit
MAX_TOKEN_ID = 2 ** 32 - 1

EXPORT_ATTRIBUTE = '__export__'
CALLER_ARGUMENT = 'caller'

# Two principals plus a delimiter must fit in one key
MAX_PRINCIPAL_SIZE = 256
