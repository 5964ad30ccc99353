from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError

from sqlpane.errorManager import DatabaseConnectionError, engineErrorFromException
from sqlpane.paneUtils import sqlTypeToScalarType
from sqlpane.resultSet import Batch, Column

IN_MEMORY_URL = 'duckdb:///:memory:'


class Statement():
    '''
    A statement bound to its connection but not yet run. SQL text is sent to
    the driver exactly as typed: exec_driver_sql() skips SQLAlchemy's
    bind-parameter parsing, so a literal such as 'a:b' stays intact.
    '''
    def __init__(self, connection, sqlText):
        self._connection = connection
        self.sqlText = sqlText

    def query(self, batchSize=1024):
        '''
        Runs the statement and returns an iterator of Batches. The cursor is
        read with fetchmany() so each chunk becomes one batch. Statements
        that return no rows (DDL, DML) yield nothing.
        '''
        try:
            result = self._connection.executeDriverSql(self.sqlText)
        except SQLAlchemyError as e:
            raise engineErrorFromException(e, self._connection.getDialect())
        return self._iterateBatches(result, batchSize)

    def _iterateBatches(self, result, batchSize):
        try:
            if not result.returns_rows:
                result.close()
                return

            description = result.cursor.description or []
            names = list(result.keys())
            schema = tuple(Column(name, sqlTypeToScalarType(d[1] if len(d) > 1 else None))
                           for name, d in zip(names, description))
            if len(schema) < len(names):
                schema += tuple(Column(name) for name in names[len(schema):])

            emitted = False
            while True:
                rows = result.fetchmany(batchSize)
                if not rows:
                    break
                emitted = True
                yield Batch(schema, tuple(tuple(row) for row in rows))

            # Keep the header of an empty result visible
            if not emitted:
                yield Batch(schema, ())
        except SQLAlchemyError as e:
            raise engineErrorFromException(e, self._connection.getDialect())


class EngineConnection():
    '''
    The single connection to the query engine. Created once by main(), owned
    by the QueryExecutor, closed once at exit.
    '''
    def __init__(self, connectionString=IN_MEMORY_URL):
        self._connectionString = connectionString
        self._engine = None
        self._cxn = None

    def getDialect(self):
        return self._engine.dialect.name if self._engine is not None else None

    def connect(self):
        try:
            self._engine = create_engine(self._connectionString)
            self._cxn = self._engine.connect()
        except Exception as e:
            raise DatabaseConnectionError(type(e).__name__, e.args)
        return self

    def prepare(self, sqlText):
        if self._cxn is None:
            raise DatabaseConnectionError('NotConnected', (self._connectionString,))
        return Statement(self, sqlText)

    def executeDriverSql(self, sqlText):
        return self._cxn.exec_driver_sql(sqlText)

    def commit(self):
        try:
            self._cxn.commit()
        except SQLAlchemyError as e:
            raise engineErrorFromException(e, self.getDialect())

    def rollback(self):
        # A failed statement can leave the engine's transaction aborted;
        # rolling back keeps the session usable for the next query.
        try:
            self._cxn.rollback()
        except SQLAlchemyError as e:
            raise engineErrorFromException(e, self.getDialect())

    def close(self):
        if self._cxn is not None:
            self._cxn.close()
            self._cxn = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None


def openInMemory(connectionString=IN_MEMORY_URL):
    return EngineConnection(connectionString).connect()
