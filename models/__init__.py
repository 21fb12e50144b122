"""
=============================
Record type models package.
=============================

Describes the record classes that bulk INSERT generation works on.

Modules:
    record_types: Field descriptors, semantic types and the non_editable() helper

Example:
    >>> from models.record_types import describe_record_type
    >>> describe_record_type(Person).column_names
    ('Name', 'Age')
"""

from .record_types import (
    FieldDescriptor,
    RecordDescriptor,
    RecordTypeError,
    SemanticType,
    describe_record_type,
    non_editable,
    semantic_type_for,
)

__all__ = [
    'FieldDescriptor',
    'RecordDescriptor',
    'RecordTypeError',
    'SemanticType',
    'describe_record_type',
    'non_editable',
    'semantic_type_for',
]
