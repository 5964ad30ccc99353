import pytest

from sqlpane.controlLoop import ControlLoop
from sqlpane.databaseConnection import openInMemory
from sqlpane.queryExecutor import QueryExecutor
from sqlpane.resultRenderer import ResultRenderer


@pytest.fixture
def executor():
    executor = QueryExecutor(openInMemory('sqlite://'), batchSize=2)
    yield executor
    executor.close()


@pytest.fixture
def loop(executor):
    return ControlLoop(executor, ResultRenderer())


@pytest.fixture
def duckdbExecutor():
    executor = QueryExecutor(openInMemory())
    yield executor
    executor.close()
