"""Derived-schema builders.

Every entity exposes a canonical schema plus operation-specific variants
(form/create, update, public, document). The variants are never written by
hand: they are produced from the canonical model's field table
(``model.model_fields``) with ``pydantic.create_model``, so omission,
partial-ing and redaction are table transformations and the canonical schema
stays the single source of truth.

Each cloned field keeps its annotation, constraints, normalizers, alias and
default, so a derived schema validates a field exactly like the canonical one.

Architecture:
    - Builders run once at import time; the resulting classes are module constants
    - Strictness (``extra="forbid"``) of the source schema is inherited
    - Model-level validators are not carried into omission-derived variants;
      cross-field rules live on the schemas that need them
"""

from typing import Annotated, Any, Iterable, Optional

from pydantic import BaseModel, BeforeValidator, Field, create_model
from pydantic.fields import FieldInfo
from pydantic_core import PydanticCustomError

from medschemas.domain.common import EntityModel, ObjectId, StrictEntityModel, is_strict
from medschemas.domain.validation import IMMUTABLE_ERROR_TYPE, SchemaDefinitionError

ID_FIELD = "id"

AUDIT_FIELDS = frozenset({
    "created_by",
    "updated_by",
    "modified_by",
    "created_at",
    "updated_at",
})

CREATION_FIELDS = frozenset({"created_by", "created_at"})

SENSITIVE_FIELDS = ("password",)


def _check_fields(model: type[BaseModel], names: Iterable[str]) -> None:
    missing = sorted(set(names) - set(model.model_fields))
    if missing:
        raise SchemaDefinitionError(
            f"{model.__name__} has no field(s) {missing}",
            model_name=model.__name__,
            fields=missing,
        )


def _clone_field(field: FieldInfo, *, optional: bool = False) -> tuple[Any, FieldInfo]:
    """Rebuild a ``(annotation, FieldInfo)`` pair for ``create_model``.

    Parameters:
        field: Field taken from the source model's ``model_fields``
        optional: Replace the default with ``None`` (update variants). The
            annotation is unchanged, so a supplied value is validated exactly
            as before while an omitted one is simply left unset.
    """
    annotation = field.annotation
    if field.metadata:
        annotation = Annotated[(annotation, *field.metadata)]

    kwargs: dict[str, Any] = {"description": field.description}
    if field.alias is not None:
        kwargs["alias"] = field.alias
    if field.exclude:
        kwargs["exclude"] = True

    if optional:
        kwargs["default"] = None
    elif field.default_factory is not None:
        kwargs["default_factory"] = field.default_factory
    elif not field.is_required():
        kwargs["default"] = field.default

    return annotation, Field(**kwargs)


def _reject_immutable(value: Any) -> Any:
    raise PydanticCustomError(
        IMMUTABLE_ERROR_TYPE,
        "El campo no puede modificarse después de la creación",
    )


def _immutable_slot(field: FieldInfo) -> tuple[Any, FieldInfo]:
    """Field that accepts omission only; any supplied value is rejected."""
    kwargs: dict[str, Any] = {
        "default": None,
        "exclude": True,
        "description": "Immutable after creation",
    }
    if field.alias is not None:
        kwargs["alias"] = field.alias
    return Annotated[Any, BeforeValidator(_reject_immutable)], Field(**kwargs)


def _base_for(model: type[BaseModel]) -> type[EntityModel]:
    return StrictEntityModel if is_strict(model) else EntityModel


def omit_fields(
    model: type[BaseModel],
    omit: Iterable[str],
    *,
    name: str,
    doc: Optional[str] = None,
) -> type[BaseModel]:
    """Derive a schema containing every field of ``model`` except ``omit``.

    Raises:
        SchemaDefinitionError: If ``omit`` names a field ``model`` does not have
    """
    omit = frozenset(omit)
    _check_fields(model, omit)
    fields = {
        field_name: _clone_field(field)
        for field_name, field in model.model_fields.items()
        if field_name not in omit
    }
    return create_model(
        name,
        __base__=_base_for(model),
        __module__=model.__module__,
        __doc__=doc or f"{model.__name__} without {', '.join(sorted(omit))}.",
        **fields,
    )


def form_variant(
    model: type[BaseModel],
    *,
    name: str,
    tenant: Iterable[str] = (),
    generated: Iterable[str] = (),
) -> type[BaseModel]:
    """Form/create variant: no id, tenant, audit or server-generated fields.

    Parameters:
        model: Canonical schema
        name: Class name of the derived schema
        tenant: Tenant field(s) injected by the backend middleware
        generated: Other fields the server computes (tokens, statistics, ...)
    """
    omit = {ID_FIELD} | AUDIT_FIELDS | set(tenant) | set(generated)
    return omit_fields(
        model,
        omit & set(model.model_fields),
        name=name,
        doc=f"Create/form payload for {model.__name__}.",
    )


def update_variant(
    model: type[BaseModel],
    *,
    name: str,
    immutable: Iterable[str] = (),
    generated: Iterable[str] = (),
) -> type[BaseModel]:
    """Update variant: every field optional, immutable fields rejected.

    Fields are made optional at the top level only; nested objects keep their
    own required fields. The id, the audit block and ``generated`` fields are
    dropped (unknown keys are ignored unless the schema is strict). Tenant and
    owner references listed in ``immutable``, together with the creation audit
    fields, are kept as slots that fail with ``immutable_field`` when supplied.

    Dump an update payload with ``exclude_unset=True`` to obtain the changes.
    """
    immutable = frozenset(immutable)
    generated = frozenset(generated)
    _check_fields(model, immutable | generated)
    creation = CREATION_FIELDS & set(model.model_fields)
    locked = immutable | creation
    dropped = ({ID_FIELD} | AUDIT_FIELDS | generated) - locked

    fields: dict[str, tuple[Any, FieldInfo]] = {}
    for field_name, field in model.model_fields.items():
        if field_name in locked:
            fields[field_name] = _immutable_slot(field)
        elif field_name not in dropped:
            fields[field_name] = _clone_field(field, optional=True)

    return create_model(
        name,
        __base__=_base_for(model),
        __module__=model.__module__,
        __doc__=f"Partial update payload for {model.__name__}.",
        **fields,
    )


def public_variant(
    model: type[BaseModel],
    *,
    name: str,
    sensitive: Iterable[str] = SENSITIVE_FIELDS,
) -> type[BaseModel]:
    """Public variant: the canonical schema minus sensitive fields."""
    return omit_fields(
        model,
        sensitive,
        name=name,
        doc=f"{model.__name__} safe for display (sensitive fields removed).",
    )


def document_variant(model: type[BaseModel], *, name: str) -> type[BaseModel]:
    """Document variant: the canonical schema with ``_id`` required.

    Built as a subclass, so model-level validators of the canonical schema
    still apply.
    """
    _check_fields(model, {ID_FIELD})
    return create_model(
        name,
        __base__=model,
        __module__=model.__module__,
        __doc__=f"Persisted {model.__name__} (identifier required).",
        id=(ObjectId, Field(..., alias="_id", description="Persisted identifier")),
    )
