import re
import datetime
import decimal
import uuid
from enum import Enum

class ScalarType(Enum):
    INTEGER = 1
    DECIMAL = 2
    BOOLEAN = 3
    STRING = 4
    DATE = 5
    TIME = 6
    TIMESTAMP = 7
    INTERVAL = 8
    BLOB = 9
    UUID = 10
    NESTED = 11
    UNKNOWN = 0

def sqlTypeToScalarType(sqlType_0):
    '''
    Maps the type code found in a DBAPI cursor description onto a ScalarType.
    Drivers disagree wildly here: DuckDB gives type names such as "INTEGER"
    or "NUMBER", SQLite gives None. Anything unrecognized is UNKNOWN and the
    column type is then inferred from its values.
    '''
    if sqlType_0 is None:
        return ScalarType.UNKNOWN
    fullType = str(sqlType_0).strip().lower()
    sqlType = fullType.partition('(')[0].strip()

    # Note carefully the differing semantics of the following comparisons
    if re.search(r'\[\d*\]$', fullType):    # INTEGER[], INTEGER[2], DECIMAL(9,2)[]
        return ScalarType.NESTED
    elif re.match('json|union', sqlType):
        # Parsed JSON and union members come back as whatever they hold
        return ScalarType.UNKNOWN
    elif 'bool' in sqlType:
        return ScalarType.BOOLEAN
    elif re.match('list|struct|map|array|dict', sqlType):
        return ScalarType.NESTED
    elif sqlType == 'interval':
        return ScalarType.INTERVAL
    elif 'int' in sqlType:    # tinyint .. hugeint, uinteger, ...
        return ScalarType.INTEGER
    elif re.match('dec|num|double|float|real|fix', sqlType):
        return ScalarType.DECIMAL
    elif re.match('uuid', sqlType):
        return ScalarType.UUID
    elif 'char' in sqlType or re.match('string|text|enum|bit', sqlType):    # BIT values are '0101' strings
        return ScalarType.STRING
    elif sqlType == 'date':
        return ScalarType.DATE
    elif sqlType.startswith('time') and 'stamp' not in sqlType:
        return ScalarType.TIME
    elif 'time' in sqlType:    # datetimes and timestamps
        return ScalarType.TIMESTAMP
    elif re.match('blob|bytea|binary|varbinary', sqlType):
        return ScalarType.BLOB
    return ScalarType.UNKNOWN

def valueToScalarType(value):
    '''
    Infers a ScalarType from a Python value as returned by the driver.
    Order matters: bool is an int and datetime is a date.
    '''
    if isinstance(value, bool):
        return ScalarType.BOOLEAN
    elif isinstance(value, int):
        return ScalarType.INTEGER
    elif isinstance(value, (float, decimal.Decimal)):
        return ScalarType.DECIMAL
    elif isinstance(value, str):
        return ScalarType.STRING
    elif isinstance(value, datetime.datetime):
        return ScalarType.TIMESTAMP
    elif isinstance(value, datetime.date):
        return ScalarType.DATE
    elif isinstance(value, datetime.time):
        return ScalarType.TIME
    elif isinstance(value, datetime.timedelta):
        return ScalarType.INTERVAL
    elif isinstance(value, (bytes, bytearray, memoryview)):
        return ScalarType.BLOB
    elif isinstance(value, uuid.UUID):
        return ScalarType.UUID
    elif isinstance(value, (list, tuple, dict)):
        return ScalarType.NESTED
    return ScalarType.UNKNOWN
