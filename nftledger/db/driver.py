from nftledger.db.encoder import encode, decode, make_key
from nftledger.exceptions import DatabaseDriverNotFound
from nftledger.logger import get_logger
from nftledger import config
import pymongo
import re

log = get_logger('Driver')

# DB maps bytes to bytes
# Driver maps string to python object


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        key = item.encode()
        return decode(self.db.get(key))

    def set(self, key: str, value):
        if value is None:
            self.__delitem__(key)
        else:
            self.db[key.encode()] = encode(value).encode()

    def delete(self, key: str):
        self.__delitem__(key)

    def iter(self, prefix: str):
        p = prefix.encode()

        l = []
        for k in sorted(self.db.keys()):
            if k.startswith(p):
                l.append(k.decode())

        return l

    def keys(self):
        return sorted([k.decode() for k in self.db.keys()])

    def flush(self):
        self.db.clear()

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        k = key.encode()
        try:
            del self.db[k]
        except KeyError:
            pass


class MongoDriver:
    # conn_str see https://www.mongodb.com/docs/manual/reference/connection-string/
    def __init__(self, conn_str=config.MONGO_URL, db=config.MONGO_DB, collection=config.MONGO_COLLECTION):
        self.client = pymongo.MongoClient(conn_str)
        self.db = self.client[db][collection]
        log.debug('Using collection {}.{}'.format(db, collection))

    def get(self, item: str):
        v = self.db.find_one({'rawKey': item})
        if v is None:
            return None

        return decode(v['value'])

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
            return

        self.db.update_one({'rawKey': key}, {'$set': {'value': encode(value)}}, upsert=True)

    def delete(self, key: str):
        self.db.delete_one({'rawKey': key})

    def iter(self, prefix: str):
        cur = self.db.find({'rawKey': {'$regex': '^{}'.format(re.escape(prefix))}})

        keys = []
        for entry in cur:
            keys.append(entry['rawKey'])

        keys.sort()
        return keys

    def keys(self):
        k = []
        for entry in self.db.find({}):
            k.append(entry['rawKey'])
        k.sort()
        return k

    def flush(self):
        self.db.delete_many({})

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        self.delete(key)


DRIVERS = {
    'memory': InMemDriver,
    'mongo': MongoDriver,
}


def get_driver(db_type=None, **kwargs):
    db_type = db_type or config.DB_TYPE

    driver = DRIVERS.get(db_type)
    if driver is None:
        raise DatabaseDriverNotFound(driver=db_type, known_drivers=sorted(DRIVERS.keys()))

    log.debug('Loading {} driver'.format(db_type))
    return driver(**kwargs)


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}
        self.driver = driver or get_driver()

    def find(self, key: str):
        # A pending None is a pending delete and hides whatever is on disk
        if key in self.pending_writes:
            return self.pending_writes[key]

        return self.driver.get(key)

    def get(self, key: str):
        return self.find(key)

    def set(self, key, value):
        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def checkpoint(self):
        return dict(self.pending_writes)

    def commit(self):
        for k, v in self.pending_writes.items():
            if v is None:
                self.driver.delete(k)
            else:
                self.driver.set(k, v)

        log.debug('Committed {} writes'.format(len(self.pending_writes)))
        self.pending_writes.clear()

    def rollback(self, checkpoint=None):
        if checkpoint is None:
            # Returns to disk state which should be whatever it was prior to any write sessions
            self.pending_writes.clear()
        else:
            self.pending_writes = dict(checkpoint)

    def clear_pending_state(self):
        self.rollback()


class LedgerDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR

    def items(self, prefix=''):
        _items = {}
        keys = set()

        for k, v in self.pending_writes.items():
            if k.startswith(prefix):
                keys.add(k)
                if v is not None:
                    _items[k] = v

        for k in set(self.driver.iter(prefix=prefix)) - keys:
            _items[k] = self.driver.get(k)

        return _items

    def keys(self, prefix=''):
        return sorted(self.items(prefix).keys())

    def values(self, prefix=''):
        return list(self.items(prefix).values())

    def make_key(self, contract, variable, args=[]):
        return make_key(contract, variable, args)

    def get_var(self, contract, variable, arguments=[]):
        key = self.make_key(contract, variable, arguments)
        return self.get(key)

    def set_var(self, contract, variable, arguments=[], value=None):
        key = self.make_key(contract, variable, arguments)
        self.set(key, value)

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
