from nftledger.execution.executor import Executor
from nftledger.db.driver import LedgerDriver
from nftledger.events import EventLog
from nftledger.ledger import Ledger
from nftledger.db.orm import Hash
from nftledger import config
from functools import partial


class AbstractLedger:
    def __init__(self, name, signer, executor: Executor, funcs):
        self.name = name
        self.signer = signer
        self.executor = executor
        self.functions = funcs

        # each function is a partial that allows signer overriding per call
        for func in funcs:
            setattr(self, func, partial(self._abstract_function_call,
                                        signer=self.signer,
                                        executor=self.executor,
                                        func=func))

    def keys(self):
        return self.executor.driver.keys(self.name + config.INDEX_SEPARATOR)

    def quick_read(self, variable, key=None):
        if key is None:
            return Hash(contract=self.name, name=variable, driver=self.executor.driver).all()
        return Hash(contract=self.name, name=variable, driver=self.executor.driver)[key]

    def _abstract_function_call(self, signer, executor, func, **kwargs):
        output = executor.execute(sender=signer,
                                  function_name=func,
                                  kwargs=kwargs)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']


class LedgerClient:
    def __init__(self, signer='sys', driver=None, sink=None, ledger_name=config.LEDGER_NAME):
        self.raw_driver = driver or LedgerDriver()
        self.events = sink if sink is not None else EventLog()
        self.executor = Executor(driver=self.raw_driver, sink=self.events, ledger_name=ledger_name)
        self.signer = signer
        self.ledger_name = ledger_name

    def flush(self):
        self.raw_driver.flush()

    # Returns abstract ledger which has partial methods mapped to each exported function.
    def get_ledger(self, signer=None):
        funcs = Ledger(driver=self.raw_driver, name=self.ledger_name).exported_functions()

        return AbstractLedger(name=self.ledger_name,
                              signer=signer or self.signer,
                              executor=self.executor,
                              funcs=funcs)

    def get_var(self, variable, arguments=[]):
        return self.raw_driver.get_var(self.ledger_name, variable, arguments)

    def set_var(self, variable, arguments=[], value=None):
        self.raw_driver.set_var(self.ledger_name, variable, arguments, value)
