from unittest import TestCase
from nftledger.events import Transfer, Approval, ApprovalForAll, Mint, EventLog
from nftledger import config


class TestEvents(TestCase):
    def test_transfer_to_dict(self):
        e = Transfer(from_='stu', to='raghu', token=1)

        self.assertDictEqual(e.to_dict(), {'event': 'Transfer', 'from': 'stu', 'to': 'raghu', 'token': 1})

    def test_mint_to_dict(self):
        e = Mint(to='stu', token=1, uri='https://example.com/nft/1')

        self.assertDictEqual(e.to_dict(), {
            'event': 'Mint', 'to': 'stu', 'token': 1, 'uri': 'https://example.com/nft/1'
        })

    def test_approval_for_all_to_dict(self):
        e = ApprovalForAll(owner='stu', operator='raghu', approved=False)

        self.assertDictEqual(e.to_dict(), {
            'event': 'ApprovalForAll', 'owner': 'stu', 'operator': 'raghu', 'approved': False
        })

    def test_same_fields_different_event_not_equal(self):
        self.assertNotEqual(Transfer('stu', 'raghu', 1), Approval('stu', 'raghu', 1))

    def test_same_event_equal(self):
        self.assertEqual(Transfer('stu', 'raghu', 1), Transfer(from_='stu', to='raghu', token=1))

    def test_events_hashable(self):
        s = {Transfer('stu', 'raghu', 1), Transfer('stu', 'raghu', 1), Approval('stu', 'raghu', 1)}
        self.assertEqual(len(s), 2)

    def test_repr_names_event(self):
        self.assertTrue(repr(Mint('stu', 1, 'x')).startswith('Mint('))


class TestEventLog(TestCase):
    def test_emit_appends_in_order(self):
        log = EventLog()
        log.emit(Mint('stu', 1, 'x'))
        log.emit(Transfer(config.NULL_PRINCIPAL, 'stu', 1))

        self.assertEqual(len(log), 2)
        self.assertEqual(log[0], Mint('stu', 1, 'x'))
        self.assertEqual(log[1], Transfer(config.NULL_PRINCIPAL, 'stu', 1))

    def test_events_is_a_copy(self):
        log = EventLog()
        events = log.events
        log.emit(Mint('stu', 1, 'x'))

        self.assertListEqual(events, [])

    def test_iterates(self):
        log = EventLog()
        log.emit(Mint('stu', 1, 'x'))

        self.assertListEqual(list(log), [Mint('stu', 1, 'x')])

    def test_to_dicts(self):
        log = EventLog()
        log.emit(Approval('stu', 'raghu', 1))

        self.assertListEqual(log.to_dicts(), [{'event': 'Approval', 'from': 'stu', 'to': 'raghu', 'token': 1}])
