"""
ACK Generator — Canonical Issue Structures

Este módulo define o padrão canônico de issues da validação pós-load
da configuração do gerador. Issues são artefatos de diagnóstico e devem ser:

- explícitas
- serializáveis
- localizáveis (recurso/operação/campo)
- acionáveis

Nenhuma correção automática é aplicada: toda issue é reportada ao operador.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional


SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigIssue:
    """
    Payload canônico de uma issue de configuração.

    Campos:
    - type: código estável da issue (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: contexto estruturado (resource, operation, field, ...)
    - hint: ação sugerida ao operador (onde corrigir)
    - severity: "error" bloqueia o gerador; "warning" apenas informa
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    severity: str = SEVERITY_ERROR

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável da issue."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de issue
# ---------------------------------------------------------------------------

# Unpack attributes map
MULTIPLE_OWNER_ACCOUNT_ID_FIELDS = "MULTIPLE_OWNER_ACCOUNT_ID_FIELDS"
OWNER_ACCOUNT_ID_NOT_READ_ONLY = "OWNER_ACCOUNT_ID_NOT_READ_ONLY"

# Renames
RENAME_COLLISION = "RENAME_COLLISION"

# Exceptions
EXCEPTION_SHAPE_COLLISION = "EXCEPTION_SHAPE_COLLISION"
EXCEPTION_CODE_OUT_OF_RANGE = "EXCEPTION_CODE_OUT_OF_RANGE"

# List operation
LIST_OPERATION_EMPTY_MATCH_FIELDS = "LIST_OPERATION_EMPTY_MATCH_FIELDS"
LIST_OPERATION_DUPLICATE_MATCH_FIELD = "LIST_OPERATION_DUPLICATE_MATCH_FIELD"

# Identificadores / referências
EMPTY_IDENTIFIER = "EMPTY_IDENTIFIER"
IGNORED_RESOURCE_OVERRIDE = "IGNORED_RESOURCE_OVERRIDE"
UNKNOWN_RESOURCE = "UNKNOWN_RESOURCE"
UNKNOWN_OPERATION = "UNKNOWN_OPERATION"
UNKNOWN_SHAPE = "UNKNOWN_SHAPE"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def multiple_owner_account_id_fields(
    *,
    resource: str,
    fields: List[str],
    hint: str = "Mark exactly one attribute with contains_owner_account_id.",
) -> ConfigIssue:
    return ConfigIssue(
        type=MULTIPLE_OWNER_ACCOUNT_ID_FIELDS,
        message=f"resource {resource!r} flags {len(fields)} attributes as owner account ID",
        details={
            "resource": resource,
            "fields": fields,
            "section": "unpack_attributes_map.fields",
        },
        hint=hint,
    )


def owner_account_id_not_read_only(
    *,
    resource: str,
    field: str,
    hint: str = "The owner account ID is observed state; set is_read_only: true.",
) -> ConfigIssue:
    return ConfigIssue(
        type=OWNER_ACCOUNT_ID_NOT_READ_ONLY,
        message=f"owner account ID attribute {field!r} of resource {resource!r} is not read-only",
        details={
            "resource": resource,
            "field": field,
            "section": "unpack_attributes_map.fields",
        },
        hint=hint,
        severity=SEVERITY_WARNING,
    )


def rename_collision(
    *,
    resource: str,
    operation: str,
    direction: str,
    target: str,
    sources: List[str],
    hint: str = "Rename each original field to a distinct name.",
) -> ConfigIssue:
    return ConfigIssue(
        type=RENAME_COLLISION,
        message=(
            f"{direction} fields {sources} of operation {operation!r} "
            f"are all renamed to {target!r}"
        ),
        details={
            "resource": resource,
            "operation": operation,
            "direction": direction,
            "target": target,
            "sources": sources,
            "section": f"renames.operations.{operation}.{direction}_fields",
        },
        hint=hint,
    )


def exception_shape_collision(
    *,
    resource: str,
    shape: str,
    codes: List[int],
    hint: str = "Map each exception shape to a single HTTP status code.",
) -> ConfigIssue:
    return ConfigIssue(
        type=EXCEPTION_SHAPE_COLLISION,
        message=f"exception shape {shape!r} is mapped by status codes {codes}",
        details={
            "resource": resource,
            "shape": shape,
            "codes": codes,
            "section": "exceptions.codes",
        },
        hint=hint,
        severity=SEVERITY_WARNING,
    )


def exception_code_out_of_range(
    *,
    resource: str,
    code: int,
    hint: str = "Use an HTTP status code between 100 and 599.",
) -> ConfigIssue:
    return ConfigIssue(
        type=EXCEPTION_CODE_OUT_OF_RANGE,
        message=f"status code {code} of resource {resource!r} is not a valid HTTP status",
        details={"resource": resource, "code": code, "section": "exceptions.codes"},
        hint=hint,
    )


def list_operation_empty_match_fields(
    *,
    resource: str,
    hint: str = "List at least one field in match_fields or drop list_operation.",
) -> ConfigIssue:
    return ConfigIssue(
        type=LIST_OPERATION_EMPTY_MATCH_FIELDS,
        message=f"list_operation of resource {resource!r} has no match fields",
        details={"resource": resource, "section": "list_operation.match_fields"},
        hint=hint,
    )


def list_operation_duplicate_match_field(
    *,
    resource: str,
    field: str,
    hint: str = "List each match field once.",
) -> ConfigIssue:
    return ConfigIssue(
        type=LIST_OPERATION_DUPLICATE_MATCH_FIELD,
        message=f"match field {field!r} of resource {resource!r} is listed more than once",
        details={
            "resource": resource,
            "field": field,
            "section": "list_operation.match_fields",
        },
        hint=hint,
    )


def empty_identifier(
    *,
    resource: str,
    section: str,
    hint: str = "Provide a non-blank name.",
) -> ConfigIssue:
    return ConfigIssue(
        type=EMPTY_IDENTIFIER,
        message=f"blank name at {section} of resource {resource!r}",
        details={"resource": resource, "section": section},
        hint=hint,
    )


def ignored_resource_override(
    *,
    resource: str,
    hint: str = "Remove the override or stop ignoring the resource.",
) -> ConfigIssue:
    return ConfigIssue(
        type=IGNORED_RESOURCE_OVERRIDE,
        message=f"resource {resource!r} is ignored, its override will never be used",
        details={"resource": resource, "section": "ignore.resource_names"},
        hint=hint,
        severity=SEVERITY_WARNING,
    )


def unknown_reference(
    *,
    kind: str,
    name: str,
    section: str,
    resource: Optional[str] = None,
) -> ConfigIssue:
    """Referência a um recurso/operação/shape inexistente na API."""
    issue_type = {
        "resource": UNKNOWN_RESOURCE,
        "operation": UNKNOWN_OPERATION,
        "shape": UNKNOWN_SHAPE,
    }[kind]
    return ConfigIssue(
        type=issue_type,
        message=f"{kind} {name!r} does not exist in the API description",
        details={"resource": resource, "name": name, "section": section},
        hint=f"Check the spelling of the {kind} name (names are case-sensitive).",
    )
