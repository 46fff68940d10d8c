from nftledger.db.driver import LedgerDriver
from nftledger.events import EventLog
from nftledger.exceptions import CannotFetchValue
from nftledger.ledger import Ledger, is_exported
from nftledger.logger import get_logger
from nftledger import config
from copy import deepcopy
import inspect
import traceback

log = get_logger('LEDGER')


class Executor:
    def __init__(self, driver=None, sink=None, ledger_name=config.LEDGER_NAME):
        self.driver = driver

        if not self.driver:
            self.driver = LedgerDriver()

        # Where events end up once the call that produced them succeeded
        self.sink = sink if sink is not None else EventLog()
        self.ledger_name = ledger_name

    def execute(self, sender, function_name, kwargs, auto_commit=True) -> dict:
        checkpoint = self.driver.checkpoint()
        pending_events = EventLog()

        ledger = Ledger(driver=self.driver, sink=pending_events, name=self.ledger_name)

        try:
            func = getattr(ledger, function_name, None)
            assert func is not None and is_exported(func), 'Function {} is not exported by the ledger.'.format(
                function_name
            )

            kwargs = dict(kwargs)
            if config.CALLER_ARGUMENT in inspect.signature(func).parameters:
                kwargs[config.CALLER_ARGUMENT] = sender

            result = func(**kwargs)
            status_code = 0

            writes = deepcopy({
                k: v for k, v in self.driver.pending_writes.items()
                if k not in checkpoint or checkpoint[k] != v
            })

            if auto_commit:
                self.driver.commit()

            for event in pending_events:
                self.sink.emit(event)

            events = pending_events.events
        except Exception as e:
            result = e
            status_code = 1
            writes = {}
            events = []

            if isinstance(e, CannotFetchValue):
                log.critical('Ledger invariant violated: {}'.format(e))
            else:
                log.error(str(e))
            log.debug(traceback.format_exc())

            self.driver.rollback(checkpoint)

        output = {
            'status_code': status_code,
            'result': result,
            'events': events,
            'writes': writes,
        }

        return output
