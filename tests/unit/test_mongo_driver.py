from unittest import TestCase
from unittest.mock import patch
from nftledger.db.driver import MongoDriver, LedgerDriver, get_driver
import re


class FakeCollection:
    """Just enough of a pymongo collection for rawKey documents."""
    def __init__(self):
        self.docs = {}

    def find_one(self, query):
        doc = self.docs.get(query['rawKey'])
        return dict(doc) if doc is not None else None

    def update_one(self, query, update, upsert=False):
        key = query['rawKey']
        if key not in self.docs:
            if not upsert:
                return
            self.docs[key] = {'rawKey': key}
        self.docs[key].update(update['$set'])

    def delete_one(self, query):
        self.docs.pop(query['rawKey'], None)

    def delete_many(self, query):
        self.docs.clear()

    def find(self, query):
        pattern = query.get('rawKey', {}).get('$regex') if query else None
        for key in list(self.docs.keys()):
            if pattern is None or re.match(pattern, key):
                yield dict(self.docs[key])


class FakeClient:
    def __init__(self, conn_str):
        self.conn_str = conn_str
        self.collection = FakeCollection()

    def __getitem__(self, db):
        return {'state': self.collection, 'other': self.collection}


class TestMongoDriver(TestCase):
    def setUp(self):
        patcher = patch('nftledger.db.driver.pymongo.MongoClient', FakeClient)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.d = MongoDriver(conn_str='mongodb://example:27017', db='nftledger', collection='state')

    def test_connects_with_connection_string(self):
        self.assertEqual(self.d.client.conn_str, 'mongodb://example:27017')

    def test_get_set(self):
        self.d.set('erc721.token_owner:1', 'stu')
        self.assertEqual(self.d.get('erc721.token_owner:1'), 'stu')

    def test_values_are_stored_encoded(self):
        self.d.set('erc721.owned_tokens_count:stu', 3)
        self.assertEqual(self.d.db.docs['erc721.owned_tokens_count:stu']['value'], '3')

    def test_get_missing_is_none(self):
        self.assertIsNone(self.d.get('nope'))

    def test_set_overwrites(self):
        self.d.set('a', 1)
        self.d.set('a', 2)

        self.assertEqual(self.d.get('a'), 2)
        self.assertEqual(len(self.d.db.docs), 1)

    def test_set_none_deletes(self):
        self.d.set('a', 1)
        self.d.set('a', None)

        self.assertIsNone(self.d.get('a'))

    def test_delete(self):
        self.d.set('a', 1)
        del self.d['a']

        self.assertIsNone(self.d.get('a'))

    def test_iter_matches_prefix_literally(self):
        self.d.set('erc721.token_owner:1', 'stu')
        self.d.set('erc721.token_owner:2', 'raghu')
        self.d.set('erc721xtoken_owner:3', 'nope')
        self.d.set('erc721.token_uris:1', 'x')

        self.assertListEqual(self.d.iter('erc721.token_owner:'), ['erc721.token_owner:1', 'erc721.token_owner:2'])

    def test_keys_sorted(self):
        self.d.set('b', 1)
        self.d.set('a', 1)

        self.assertListEqual(self.d.keys(), ['a', 'b'])

    def test_flush(self):
        self.d.set('a', 1)
        self.d.flush()

        self.assertListEqual(self.d.keys(), [])

    def test_get_driver_builds_mongo(self):
        d = get_driver('mongo', conn_str='mongodb://other:27017', collection='other')
        self.assertIsInstance(d, MongoDriver)

    def test_ledger_driver_commits_through_to_mongo(self):
        ledger_driver = LedgerDriver(driver=self.d)
        ledger_driver.set('erc721.token_owner:1', 'stu')

        self.assertIsNone(self.d.get('erc721.token_owner:1'))

        ledger_driver.commit()

        self.assertEqual(self.d.get('erc721.token_owner:1'), 'stu')
