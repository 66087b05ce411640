"""Legacy vocabulary translation at the package boundary.

Older producers name the tenant ``client`` instead of ``organization``, send
user preferences under ``settings`` and describe a patient's sex with words
(``male``, ``femenino``) instead of codes. The canonical schemas accept none
of that. Callers that still speak the legacy vocabulary translate their payload
here first:

    ```python
    payload = upgrade_legacy_payload("patient", body)
    result = validate_payload(PatientForm, payload)
    ```

A payload carrying both a legacy key and its canonical key is accepted only
when both hold the same value; otherwise :class:`LegacyPayloadError` is raised.

Security Impact:
    - Translation never mutates the caller's payload
    - Only key names and enum tokens are logged, never values
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from medschemas.domain.enums import (
    MaritalStatus,
    NotificationType,
    RelatedEntityType,
    Sex,
)
from medschemas.domain.validation import LegacyPayloadError

logger = logging.getLogger(__name__)

LEGACY_ENTITY_NAMES: Mapping[str, str] = {
    "client": "organization",
    "empresa": "company",
    "paciente": "patient",
    "historia_clinica": "clinical_record",
}
"""Legacy entity name to canonical registry name."""

TENANT_SCOPED_ENTITIES = frozenset({
    "team",
    "invitation",
    "company",
    "patient",
    "clinical_record",
    "scheduled_exam",
    "activity_log",
    "audit_log",
})

LEGACY_TENANT_KEY = "client"
TENANT_KEY = "organization"


@dataclass(frozen=True)
class KeyRename:
    """Rename ``legacy`` to ``canonical`` inside the object found at ``within``."""

    legacy: str
    canonical: str
    within: tuple[str, ...] = ()


_KEY_RENAMES: dict[str, tuple[KeyRename, ...]] = {
    "organization": (
        KeyRename("allowCrossClientAccess", "allowCrossOrganizationAccess", within=("settings",)),
    ),
    "user": (KeyRename("settings", "preferences"),),
    "patient": (KeyRename("query", "search"),),
    "admin_stats": (KeyRename("clients", "organizations"),),
}

NOTIFICATION_TYPES: Mapping[str, NotificationType] = {
    "user_joined_client": NotificationType.USER_JOINED_ORGANIZATION,
    "user_left_client": NotificationType.USER_LEFT_ORGANIZATION,
    "client_created": NotificationType.ORGANIZATION_CREATED,
}

RELATED_TYPES: Mapping[str, RelatedEntityType] = {
    "client": RelatedEntityType.ORGANIZATION,
}

SEX_WORDS: Mapping[str, Sex] = {
    "m": Sex.MALE,
    "male": Sex.MALE,
    "masculino": Sex.MALE,
    "hombre": Sex.MALE,
    "f": Sex.FEMALE,
    "female": Sex.FEMALE,
    "femenino": Sex.FEMALE,
    "mujer": Sex.FEMALE,
    "other": Sex.OTHER,
    "otro": Sex.OTHER,
}

MARITAL_STATUS_WORDS: Mapping[str, MaritalStatus] = {
    "soltero": MaritalStatus.SINGLE,
    "soltera": MaritalStatus.SINGLE,
    "soltero/a": MaritalStatus.SINGLE,
    "single": MaritalStatus.SINGLE,
    "casado": MaritalStatus.MARRIED,
    "casada": MaritalStatus.MARRIED,
    "casado/a": MaritalStatus.MARRIED,
    "married": MaritalStatus.MARRIED,
    "divorciado": MaritalStatus.DIVORCED,
    "divorciada": MaritalStatus.DIVORCED,
    "divorciado/a": MaritalStatus.DIVORCED,
    "divorced": MaritalStatus.DIVORCED,
    "viudo": MaritalStatus.WIDOWED,
    "viuda": MaritalStatus.WIDOWED,
    "viudo/a": MaritalStatus.WIDOWED,
    "widowed": MaritalStatus.WIDOWED,
    "union civil": MaritalStatus.CIVIL_UNION,
    "unión civil": MaritalStatus.CIVIL_UNION,
    "civil union": MaritalStatus.CIVIL_UNION,
}

# Exact-match maps are keyed by the raw token; word maps by its lowercase form.
_VALUE_MAPS: dict[str, dict[str, tuple[Mapping[str, Any], bool]]] = {
    "notification": {
        "type": (NOTIFICATION_TYPES, False),
        "relatedType": (RELATED_TYPES, False),
    },
    "patient": {
        "sexo": (SEX_WORDS, True),
        "estadoCivil": (MARITAL_STATUS_WORDS, True),
    },
}


def canonical_entity_name(name: str) -> str:
    """Resolve a legacy entity name; canonical names pass through."""
    return LEGACY_ENTITY_NAMES.get(name, name)


def key_renames(entity: str) -> tuple[KeyRename, ...]:
    """All key renames applied to payloads of ``entity``."""
    entity = canonical_entity_name(entity)
    renames = _KEY_RENAMES.get(entity, ())
    if entity in TENANT_SCOPED_ENTITIES:
        renames = (KeyRename(LEGACY_TENANT_KEY, TENANT_KEY),) + renames
    return renames


def _rename_key(target: dict, rename: KeyRename, entity: str) -> bool:
    if rename.legacy not in target:
        return False
    legacy_value = target.pop(rename.legacy)
    if rename.canonical in target and target[rename.canonical] != legacy_value:
        raise LegacyPayloadError(rename.legacy, rename.canonical, path=rename.within)
    target[rename.canonical] = legacy_value
    logger.debug(
        f"Renamed legacy key {rename.legacy!r} to {rename.canonical!r}",
        extra={"entity": entity, "legacy_key": rename.legacy},
    )
    return True


def _nested(payload: dict, path: tuple[str, ...]) -> Any:
    target: Any = payload
    for key in path:
        if not isinstance(target, dict):
            return None
        target = target.get(key)
    return target


def _translate_value(value: Any, mapping: Mapping[str, Any], by_word: bool) -> Any:
    if not isinstance(value, str):
        return value
    lookup = value.strip().lower() if by_word else value
    translated = mapping.get(lookup)
    if translated is None:
        return value
    return translated.value


def upgrade_legacy_payload(entity: str, payload: Any) -> Any:
    """Translate a legacy-vocabulary payload into the canonical vocabulary.

    Parameters:
        entity: Registry entity name (legacy names such as ``paciente`` are
            resolved too)
        payload: Decoded JSON object; any other value is returned unchanged so
            the schema can report the shape error

    Returns:
        A new dict in the canonical vocabulary; ``payload`` is left untouched

    Raises:
        LegacyPayloadError: If a legacy key and its canonical key carry
            different values
    """
    if not isinstance(payload, dict):
        return payload

    entity = canonical_entity_name(entity)
    upgraded = copy.deepcopy(payload)
    translations = 0

    for rename in key_renames(entity):
        target = _nested(upgraded, rename.within)
        if isinstance(target, dict) and _rename_key(target, rename, entity):
            translations += 1

    for key, (mapping, by_word) in _VALUE_MAPS.get(entity, {}).items():
        if key not in upgraded:
            continue
        translated = _translate_value(upgraded[key], mapping, by_word)
        if translated != upgraded[key]:
            logger.debug(
                f"Translated legacy value of {key!r} for {entity}",
                extra={"entity": entity, "legacy_key": key},
            )
            upgraded[key] = translated
            translations += 1

    if translations:
        logger.info(
            f"Upgraded {translations} legacy field(s) in {entity} payload",
            extra={"entity": entity, "translations": translations},
        )
    return upgraded
