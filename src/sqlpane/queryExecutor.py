from sqlpane.errorManager import EngineError
from sqlpane.resultSet import ResultSet

class QueryExecutor:
    '''
    Runs SQL text against the session's engine connection and captures the
    complete result. The executor is the only holder of the connection.
    '''

    def __init__(self, connection, batchSize=1024):
        self._connection = connection
        self._batchSize = batchSize

    @property
    def connection(self):
        return self._connection

    def execute(self, sqlText):
        '''
        Returns a new ResultSet with every row already fetched, or raises
        EngineError with the engine's diagnostic. Nothing the caller holds
        is touched either way.
        '''
        try:
            statement = self._connection.prepare(sqlText)
            batches = list(statement.query(self._batchSize))
            self._connection.commit()
        except EngineError:
            self._connection.rollback()
            raise

        return ResultSet.fromBatches(batches)

    def close(self):
        self._connection.close()
