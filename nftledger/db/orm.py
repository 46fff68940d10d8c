from nftledger.db.driver import LedgerDriver
from nftledger import config


class Datum:
    def __init__(self, contract, name, driver: LedgerDriver):
        self._driver = driver
        self._key = self._driver.make_key(contract, name)


class Hash(Datum):
    """A named keyed mapping living under `contract.name:key` in the driver.

    A value of None is never stored; writing None is the same as removing the key.
    """
    def __init__(self, contract, name, driver: LedgerDriver, default_value=None):
        super().__init__(contract, name, driver=driver)
        self._delimiter = config.DELIMITER
        self._default_value = default_value

    def _full_key(self, key):
        return '{}{}{}'.format(self._key, self._delimiter, key)

    def _validate_key(self, key):
        if isinstance(key, tuple):
            assert len(key) <= config.MAX_HASH_DIMENSIONS, 'Too many dimensions ({}) for hash. Max is {}'.format(
                len(key), config.MAX_HASH_DIMENSIONS
            )

            new_key_str = ''
            for k in key:
                assert not isinstance(k, slice), 'Slices prohibited in hashes.'

                k = str(k)

                assert config.DELIMITER not in k, 'Illegal delimiter in key.'
                assert config.INDEX_SEPARATOR not in k, 'Illegal separator in key.'

                new_key_str += '{}{}'.format(k, self._delimiter)

            key = new_key_str[:-len(self._delimiter)]
        else:
            key = str(key)

            assert config.DELIMITER not in key, 'Illegal delimiter in key.'
            assert config.INDEX_SEPARATOR not in key, 'Illegal separator in key.'

        assert len(key) <= config.MAX_KEY_SIZE, 'Key is too long ({}). Max is {}.'.format(len(key), config.MAX_KEY_SIZE)
        return key

    def get(self, key):
        value = self._driver.get(self._full_key(self._validate_key(key)))

        # defaultdict behavior, so counters can start from nothing
        if value is None:
            return self._default_value

        return value

    def insert(self, key, value):
        self._driver.set(self._full_key(self._validate_key(key)), value)

    def remove(self, key):
        self._driver.delete(self._full_key(self._validate_key(key)))

    def contains(self, key):
        return self._driver.get(self._full_key(self._validate_key(key))) is not None

    def all(self):
        return self._driver.values(prefix=self._full_key(''))

    def __setitem__(self, key, value):
        self.insert(key, value)

    def __getitem__(self, key):
        return self.get(key)

    def __delitem__(self, key):
        self.remove(key)

    def __contains__(self, key):
        return self.contains(key)
