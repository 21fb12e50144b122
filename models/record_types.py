"""
===========================================================
Record type descriptors for bulk INSERT generation
===========================================================

Builds a static, per-type description of the fields a record class carries:
their names in declaration order, the semantic type that decides how each
value is rendered as a SQL literal, whether the column may be supplied by
the caller (editable) and whether the declared type is nullable.

Two kinds of record class are understood:
    - Dataclasses: the annotation of each field gives its semantic type and
      ``field(metadata={"editable": False})`` marks store-populated columns
      (use the ``non_editable()`` helper).
    - SQLAlchemy declarative models: each mapped ``Column`` gives its python
      type and nullability; ``Column(..., info={"editable": False})`` marks
      store-populated columns.

Descriptors are computed once per class and cached by type identity.

Example:
    >>> from dataclasses import dataclass
    >>> from typing import Optional
    >>> from models.record_types import describe_record_type, non_editable
    >>>
    >>> @dataclass
    ... class Customer:
    ...     customer_id: int = non_editable(default=0)
    ...     name: str = ''
    ...     age: Optional[int] = None
    >>>
    >>> describe_record_type(Customer).column_names
    ('name', 'age')
"""

import dataclasses
import datetime
import decimal
import enum
import functools
import types
import typing
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

EDITABLE_KEY = 'editable'


class RecordTypeError(TypeError):
    """Exception raised when a record class cannot be introspected."""
    pass


class SemanticType(enum.Enum):
    """Closed set of value kinds known to the literal formatter."""

    STRING = 'string'
    GUID = 'guid'
    DATETIME = 'datetime'
    INTEGER = 'integer'
    DECIMAL = 'decimal'
    FLOAT = 'float'
    OTHER = 'other'


# bool before int: bool subclasses int but renders as text
_PYTHON_TYPE_MAP: Tuple[Tuple[type, SemanticType], ...] = (
    (bool, SemanticType.OTHER),
    (str, SemanticType.STRING),
    (uuid.UUID, SemanticType.GUID),
    (datetime.datetime, SemanticType.DATETIME),
    (int, SemanticType.INTEGER),
    (decimal.Decimal, SemanticType.DECIMAL),
    (float, SemanticType.FLOAT),
)


@dataclass(frozen=True)
class FieldDescriptor:
    """Metadata of a single record field.

    Attributes:
        name: Column name, also the attribute name unless attribute_name is set
        semantic_type: Value kind deciding the literal rendering
        editable: False for columns the store populates itself
        nullable: True when the declared type admits None
        attribute_name: Attribute name on mapped classes whose column is renamed
    """

    name: str
    semantic_type: SemanticType
    editable: bool = True
    nullable: bool = False
    attribute_name: Optional[str] = None

    @property
    def attribute(self) -> str:
        """Name of the attribute holding the value on record instances."""
        return self.attribute_name or self.name


@dataclass(frozen=True)
class RecordDescriptor:
    """Ordered field metadata of a record class.

    Attributes:
        record_type: The described class
        fields: Field descriptors in declaration order
    """

    record_type: type
    fields: Tuple[FieldDescriptor, ...]

    @property
    def editable_fields(self) -> Tuple[FieldDescriptor, ...]:
        """Fields that are emitted by generated INSERT statements."""
        return tuple(f for f in self.fields if f.editable)

    @property
    def column_names(self) -> Tuple[str, ...]:
        """Names of the editable fields, in declaration order."""
        return tuple(f.name for f in self.editable_fields)


def non_editable(**field_kwargs) -> Any:
    """Declare a dataclass field that generated INSERTs must leave out.

    Accepts the same keyword arguments as ``dataclasses.field``; any
    metadata passed in is kept.

    Example:
        >>> @dataclass
        ... class Order:
        ...     order_id: int = non_editable(default=0)
        ...     reference: str = ''
    """
    metadata = dict(field_kwargs.pop('metadata', None) or {})
    metadata[EDITABLE_KEY] = False
    return dataclasses.field(metadata=metadata, **field_kwargs)


def semantic_type_for(python_type: Any) -> Tuple[SemanticType, bool]:
    """Map a python type annotation to its semantic type and nullability.

    Args:
        python_type: Annotation such as ``int``, ``Optional[str]`` or ``UUID | None``

    Returns:
        Tuple of (semantic type, nullable)
    """
    nullable = False
    origin = typing.get_origin(python_type)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(python_type) if arg is not type(None)]
        nullable = len(args) < len(typing.get_args(python_type))
        # Unions of several concrete types have no single rendering
        python_type = args[0] if len(args) == 1 else object

    if isinstance(python_type, type):
        for candidate, semantic_type in _PYTHON_TYPE_MAP:
            if issubclass(python_type, candidate):
                return semantic_type, nullable

    return SemanticType.OTHER, nullable


def _describe_dataclass(record_type: type) -> Tuple[FieldDescriptor, ...]:
    try:
        hints = typing.get_type_hints(record_type)
    except (NameError, TypeError) as e:
        raise RecordTypeError(
            f"Cannot resolve field annotations of {record_type.__name__}: {e}"
        ) from e

    descriptors = []
    for dc_field in dataclasses.fields(record_type):
        semantic_type, nullable = semantic_type_for(hints.get(dc_field.name, dc_field.type))
        descriptors.append(FieldDescriptor(
            name=dc_field.name,
            semantic_type=semantic_type,
            editable=bool(dc_field.metadata.get(EDITABLE_KEY, True)),
            nullable=nullable
        ))
    return tuple(descriptors)


def _column_python_type(column) -> Any:
    try:
        return column.type.python_type
    except NotImplementedError:
        return object


def _describe_declarative_model(record_type: type) -> Tuple[FieldDescriptor, ...]:
    attribute_names: Dict[str, str] = {}
    mapper = getattr(record_type, '__mapper__', None)
    if mapper is not None:
        # Attribute names may differ from column names on mapped classes
        for prop in mapper.column_attrs:
            for column in prop.columns:
                attribute_names[column.key] = prop.key

    descriptors = []
    for column in record_type.__table__.columns:
        semantic_type, _ = semantic_type_for(_column_python_type(column))
        descriptors.append(FieldDescriptor(
            name=column.name,
            attribute_name=attribute_names.get(column.key),
            semantic_type=semantic_type,
            editable=bool(column.info.get(EDITABLE_KEY, True)),
            nullable=bool(column.nullable)
        ))
    return tuple(descriptors)


def describe_record_type(record_type: type) -> RecordDescriptor:
    """Get the field descriptor table of a record type, built once per class.

    Args:
        record_type: A dataclass or a SQLAlchemy declarative model class

    Returns:
        RecordDescriptor with fields in declaration order

    Raises:
        RecordTypeError: If the class is neither a dataclass nor a mapped model

    Example:
        >>> descriptor = describe_record_type(Customer)
        >>> [f.semantic_type for f in descriptor.fields]
        [<SemanticType.INTEGER: 'integer'>, <SemanticType.STRING: 'string'>, ...]
    """
    if not isinstance(record_type, type):
        raise RecordTypeError(f"Expected a record class, got {record_type!r}")
    return _build_descriptor(record_type)


@functools.lru_cache(maxsize=None)
def _build_descriptor(record_type: type) -> RecordDescriptor:
    if dataclasses.is_dataclass(record_type):
        fields = _describe_dataclass(record_type)
    elif getattr(record_type, '__table__', None) is not None:
        fields = _describe_declarative_model(record_type)
    else:
        raise RecordTypeError(
            f"{record_type.__name__} is neither a dataclass nor a declarative model"
        )

    return RecordDescriptor(record_type=record_type, fields=fields)
