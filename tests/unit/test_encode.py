from unittest import TestCase
from nftledger.db.encoder import encode, decode, make_key


class TestEncode(TestCase):
    def test_int_to_bytes(self):
        i = 1000
        b = '1000'

        self.assertEqual(encode(i), b)

    def test_str_to_bytes(self):
        s = 'hello'
        b = '"hello"'

        self.assertEqual(encode(s), b)

    def test_bool_stays_bool(self):
        self.assertEqual(encode(True), 'true')
        self.assertIs(decode('true'), True)

    def test_decode_bytes_to_int(self):
        b = '1234'
        i = 1234

        self.assertEqual(decode(b), i)

    def test_decode_bytes_to_str(self):
        b = '"howdy"'
        s = 'howdy'

        self.assertEqual(decode(b), s)

    def test_decode_failure(self):
        b = b'xwow'

        self.assertIsNone(decode(b))

    def test_decode_none_is_none(self):
        self.assertIsNone(decode(None))

    def test_make_key_without_args(self):
        self.assertEqual(make_key('erc721', 'token_owner'), 'erc721.token_owner')

    def test_make_key_with_args(self):
        self.assertEqual(make_key('erc721', 'operator_approvals', ['stu', 'raghu']),
                         'erc721.operator_approvals:stu:raghu')

    def test_make_key_stringifies_args(self):
        self.assertEqual(make_key('erc721', 'token_uris', [42]), 'erc721.token_uris:42')
