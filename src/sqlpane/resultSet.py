from dataclasses import dataclass, field
from typing import Any, Tuple

from sqlpane.paneUtils import ScalarType, valueToScalarType

@dataclass(frozen=True)
class Column:
    name: str
    scalarType: ScalarType = ScalarType.UNKNOWN

@dataclass(frozen=True)
class Batch:
    '''
    One chunk of rows as fetched from the engine. Each row is a tuple of
    cell values aligned to the schema.
    '''
    schema: Tuple[Column, ...]
    rows: Tuple[Tuple[Any, ...], ...] = ()

    def __len__(self):
        return len(self.rows)

@dataclass(frozen=True)
class ResultSet:
    '''
    The rows of one query, as an ordered sequence of batches sharing one
    schema. A ResultSet is never mutated; a new query builds a new one.
    '''
    batches: Tuple[Batch, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.batches:
            schema = self.batches[0].schema
            if any(b.schema != schema for b in self.batches[1:]):
                raise ValueError('All batches of a result set must share one schema')

    @classmethod
    def fromBatches(cls, batches):
        '''
        Builds a ResultSet from freshly fetched batches. Columns whose type
        the driver did not describe take the type of their first non-null
        value; columns that are null throughout stay UNKNOWN.
        '''
        batches = list(batches)
        if not batches:
            return cls()

        schema = list(batches[0].schema)
        for i, column in enumerate(schema):
            if column.scalarType != ScalarType.UNKNOWN:
                continue
            value = next((row[i] for b in batches for row in b.rows if row[i] is not None), None)
            if value is not None:
                schema[i] = Column(column.name, valueToScalarType(value))

        schema = tuple(schema)
        return cls(tuple(Batch(schema, b.rows) for b in batches))

    @property
    def schema(self):
        return self.batches[0].schema if self.batches else ()

    @property
    def rowCount(self):
        return sum(len(b) for b in self.batches)

    def isEmpty(self):
        return not self.batches

    def rows(self):
        for batch in self.batches:
            yield from batch.rows
