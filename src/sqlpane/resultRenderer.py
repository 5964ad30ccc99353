import datetime
import decimal
import math
import uuid
from dataclasses import dataclass, field
from typing import List

from tabulate import tabulate

from sqlpane.errorManager import RenderError
from sqlpane.paneUtils import ScalarType, valueToScalarType

@dataclass
class RenderedTable:
    header: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    text: str = ''

    @property
    def lineCount(self):
        return len(self.text.splitlines())


def _expect(value, types, excluded=()):
    if isinstance(value, excluded) or not isinstance(value, types):
        raise TypeError('unexpected {} value {!r}'.format(type(value).__name__, value))

def formatInteger(value):
    _expect(value, int, excluded=bool)
    return str(value)

def formatDecimal(value):
    '''
    Plain decimal notation, never an exponent: 1e20 prints as
    100000000000000000000 and 0.1 as 0.1 (the shortest round-trip digits).
    '''
    _expect(value, (int, float, decimal.Decimal), excluded=bool)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'inf' if value > 0 else '-inf'
        value = decimal.Decimal(repr(value))
    if not value.is_finite():
        return str(value)
    return format(value, 'f')

def formatBoolean(value):
    _expect(value, bool)
    return 'true' if value else 'false'

def formatString(value):
    _expect(value, str)
    return value

def formatDate(value):
    _expect(value, datetime.date, excluded=datetime.datetime)
    return value.isoformat()

def formatTime(value):
    _expect(value, datetime.time)
    return value.isoformat()

def formatTimestamp(value):
    _expect(value, datetime.datetime)
    return value.isoformat(sep=' ')

def formatInterval(value):
    _expect(value, datetime.timedelta)
    return str(value)

def formatBlob(value):
    _expect(value, (bytes, bytearray, memoryview))
    return ''.join('\\x{:02x}'.format(b) for b in bytes(value))

def formatUuid(value):
    _expect(value, uuid.UUID)
    return str(value)

def formatUnknown(value):
    raise TypeError('no display format for {} values'.format(type(value).__name__))


class ResultRenderer:
    '''
    Turns a ResultSet into a RenderedTable: the header, every row as display
    strings, and the grid text shown in the result pane.

    Each column is formatted by the function registered for its ScalarType.
    A value its formatter cannot represent raises RenderError instead of
    being shown as something else.
    '''

    def __init__(self, nullMarker='NULL', tableFormat='psql'):
        self.nullMarker = nullMarker
        self.tableFormat = tableFormat
        self.formatters = {
            ScalarType.INTEGER: formatInteger,
            ScalarType.DECIMAL: formatDecimal,
            ScalarType.BOOLEAN: formatBoolean,
            ScalarType.STRING: formatString,
            ScalarType.DATE: formatDate,
            ScalarType.TIME: formatTime,
            ScalarType.TIMESTAMP: formatTimestamp,
            ScalarType.INTERVAL: formatInterval,
            ScalarType.BLOB: formatBlob,
            ScalarType.UUID: formatUuid,
            ScalarType.NESTED: self.formatNested,
            ScalarType.UNKNOWN: formatUnknown,
        }

    def formatNested(self, value):
        # Elements carry no column type of their own; each one is typed
        # by its value and formatted like a top-level cell.
        _expect(value, (list, tuple, dict))
        if isinstance(value, dict):
            return '{' + ', '.join('{}: {}'.format(self.formatValue(k), self.formatValue(v))
                                   for k, v in value.items()) + '}'
        return '[' + ', '.join(self.formatValue(v) for v in value) + ']'

    def formatValue(self, value, scalarType=None):
        if value is None:
            return self.nullMarker
        if scalarType is None:
            scalarType = valueToScalarType(value)
        return self.formatters[scalarType](value)

    def formatCell(self, column, value):
        try:
            return self.formatValue(value, column.scalarType)
        except (TypeError, ValueError, decimal.InvalidOperation) as e:
            raise RenderError(column.name, e)

    def render(self, resultSet):
        if resultSet.isEmpty():
            return RenderedTable()

        schema = resultSet.schema
        header = [c.name for c in schema]
        rows = [[self.formatCell(column, value) for column, value in zip(schema, row)]
                for row in resultSet.rows()]

        text = tabulate(rows, headers=header, tablefmt=self.tableFormat,
                        disable_numparse=True)
        return RenderedTable(header, rows, text)
