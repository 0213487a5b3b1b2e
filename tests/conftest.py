from io import StringIO

from pytest import Item, fixture

from rpndc.machine import Machine


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


class Sinks:
    '''
    In-memory result and diagnostic sinks, read back line by line.
    '''

    def __init__(self):
        self.out = StringIO()
        self.err = StringIO()

    def lines(self):
        return self.out.getvalue().splitlines()

    def errors(self):
        return self.err.getvalue().splitlines()


@fixture
def sinks():
    return Sinks()


@fixture
def machine(sinks):
    return Machine(prog='dc', file=sinks.out, errfile=sinks.err)
