"""Partial-update patches for documents.

A patch maps field names to one of two operations: `SetField(value)` or
`DeleteField()`. Deleting a field removes the key from the stored document,
which is different from setting it to None: queries that filter on field
existence (e.g. `dataVolta`) must not see a deleted field.

Usage:
    patch = Patch().set('temVolta', False).delete('dataVolta')
    repo.update(trip_id, patch)

    # or from a plain dict, using the DELETE_FIELD marker
    repo.update(trip_id, {'temVolta': False, 'dataVolta': DELETE_FIELD})
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple, Union


@dataclass(frozen=True)
class SetField:
    value: Any


@dataclass(frozen=True)
class DeleteField:
    pass


DELETE_FIELD = DeleteField()

FieldOp = Union[SetField, DeleteField]


class Patch:
    """Ordered set of per-field operations."""

    def __init__(self, ops: Dict[str, FieldOp] = None):
        self._ops: Dict[str, FieldOp] = dict(ops or {})

    @classmethod
    def from_fields(cls, fields: Union['Patch', Dict[str, Any]]) -> 'Patch':
        """Build a patch from a partial dict; DELETE_FIELD values become deletions."""
        if isinstance(fields, Patch):
            return fields
        patch = cls()
        for name, value in (fields or {}).items():
            if name in ('id', '_id'):
                continue
            if isinstance(value, DeleteField):
                patch.delete(name)
            elif isinstance(value, SetField):
                patch.set(name, value.value)
            else:
                patch.set(name, value)
        return patch

    def set(self, field: str, value: Any) -> 'Patch':
        self._ops[field] = SetField(value)
        return self

    def delete(self, field: str) -> 'Patch':
        self._ops[field] = DELETE_FIELD
        return self

    def sets(self) -> Dict[str, Any]:
        return {k: op.value for k, op in self._ops.items() if isinstance(op, SetField)}

    def deletes(self) -> List[str]:
        return [k for k, op in self._ops.items() if isinstance(op, DeleteField)]

    def apply(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Return a new document with the patch applied; the input is not mutated."""
        out = dict(document)
        for name, op in self._ops.items():
            if isinstance(op, DeleteField):
                out.pop(name, None)
            else:
                out[name] = op.value
        return out

    def to_mongo(self) -> Dict[str, Dict[str, Any]]:
        """Translate to a MongoDB update document ($set / $unset)."""
        update: Dict[str, Dict[str, Any]] = {}
        sets = self.sets()
        if sets:
            update['$set'] = sets
        deletes = self.deletes()
        if deletes:
            update['$unset'] = {k: '' for k in deletes}
        return update

    def items(self) -> Iterator[Tuple[str, FieldOp]]:
        return iter(self._ops.items())

    def __bool__(self):
        return bool(self._ops)

    def __len__(self):
        return len(self._ops)

    def __contains__(self, field):
        return field in self._ops

    def __eq__(self, other):
        return isinstance(other, Patch) and self._ops == other._ops

    def __repr__(self):
        return f'Patch({self._ops!r})'
