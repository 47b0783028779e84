"""
Validação semântica pós-load da configuração do gerador.

O loader só garante tipos e estrutura. Problemas como colisões de rename,
múltiplos atributos de owner account ID ou nomes de recurso inexistentes
são coletados aqui, em uma única passada, antes que o gerador comece a
consumir a árvore.

`validate_generator_config` nunca levanta exceção: retorna a lista
completa de `ConfigIssue`. `ensure_valid_generator_config` levanta
`ConfigValidationError` quando há ao menos uma issue com severidade
"error".

Referências cruzadas com a descrição da API só são verificadas quando o
chamador fornece os nomes conhecidos (`known_resources`, ...).
"""

from __future__ import annotations

from collections import defaultdict
from typing import Collection, Dict, List, Mapping, Optional

from loguru import logger

from ack_generator.core import errors as issues
from ack_generator.core.errors import ConfigIssue

from .errors import ConfigValidationError
from .schema import (
    ExceptionsConfig,
    GeneratorConfig,
    ListOperationConfig,
    RenamesConfig,
    UnpackAttributesMapConfig,
)


MIN_HTTP_STATUS = 100
MAX_HTTP_STATUS = 599


def _is_blank(name: Optional[str]) -> bool:
    return name is None or not name.strip()


def _check_unpack_attributes_map(resource: str, cfg: UnpackAttributesMapConfig) -> List[ConfigIssue]:
    out: List[ConfigIssue] = []
    for key in cfg.fields:
        if _is_blank(key):
            out.append(issues.empty_identifier(resource=resource, section="unpack_attributes_map.fields"))

    owners = list(cfg.owner_account_id_fields())
    if len(owners) > 1:
        out.append(issues.multiple_owner_account_id_fields(resource=resource, fields=owners))
    for name in owners:
        if not cfg.fields[name].is_read_only:
            out.append(issues.owner_account_id_not_read_only(resource=resource, field=name))
    return out


def _rename_collisions(
    resource: str, operation: str, direction: str, table: Mapping[str, str]
) -> List[ConfigIssue]:
    out: List[ConfigIssue] = []
    by_target: Dict[str, List[str]] = defaultdict(list)
    for original, renamed in table.items():
        if _is_blank(renamed):
            out.append(
                issues.empty_identifier(
                    resource=resource,
                    section=f"renames.operations.{operation}.{direction}_fields.{original}",
                )
            )
            continue
        by_target[renamed].append(original)

    for target, sources in by_target.items():
        if len(sources) > 1:
            out.append(
                issues.rename_collision(
                    resource=resource,
                    operation=operation,
                    direction=direction,
                    target=target,
                    sources=sorted(sources),
                )
            )
    return out


def _check_renames(resource: str, cfg: RenamesConfig) -> List[ConfigIssue]:
    out: List[ConfigIssue] = []
    for operation, op_cfg in cfg.operations.items():
        out.extend(_rename_collisions(resource, operation, "input", op_cfg.input_fields))
        out.extend(_rename_collisions(resource, operation, "output", op_cfg.output_fields))
    return out


def _check_exceptions(resource: str, cfg: ExceptionsConfig) -> List[ConfigIssue]:
    out: List[ConfigIssue] = []
    by_shape: Dict[str, List[int]] = defaultdict(list)
    for code, shape in cfg.codes.items():
        if not MIN_HTTP_STATUS <= code <= MAX_HTTP_STATUS:
            out.append(issues.exception_code_out_of_range(resource=resource, code=code))
        if _is_blank(shape):
            out.append(issues.empty_identifier(resource=resource, section=f"exceptions.codes.{code}"))
            continue
        by_shape[shape].append(code)

    for shape, codes in by_shape.items():
        if len(codes) > 1:
            out.append(issues.exception_shape_collision(resource=resource, shape=shape, codes=sorted(codes)))
    return out


def _check_list_operation(resource: str, cfg: ListOperationConfig) -> List[ConfigIssue]:
    if not cfg.match_fields:
        return [issues.list_operation_empty_match_fields(resource=resource)]

    out: List[ConfigIssue] = []
    seen: set[str] = set()
    reported: set[str] = set()
    for name in cfg.match_fields:
        if _is_blank(name):
            out.append(issues.empty_identifier(resource=resource, section="list_operation.match_fields"))
            continue
        if name in seen and name not in reported:
            out.append(issues.list_operation_duplicate_match_field(resource=resource, field=name))
            reported.add(name)
        seen.add(name)
    return out


def _check_references(
    config: GeneratorConfig,
    known_resources: Optional[Collection[str]],
    known_operations: Optional[Collection[str]],
    known_shapes: Optional[Collection[str]],
) -> List[ConfigIssue]:
    out: List[ConfigIssue] = []

    if known_resources is not None:
        for name in config.resources:
            if name not in known_resources:
                out.append(issues.unknown_reference(kind="resource", name=name, section="resources", resource=name))
        for name in sorted(config.ignore.resource_names):
            if name not in known_resources:
                out.append(issues.unknown_reference(kind="resource", name=name, section="ignore.resource_names"))

    if known_operations is not None:
        for name in sorted(config.ignore.operations):
            if name not in known_operations:
                out.append(issues.unknown_reference(kind="operation", name=name, section="ignore.operations"))
        for resource, res_cfg in config.resources.items():
            if res_cfg.renames is None:
                continue
            for op in res_cfg.renames.operations:
                if op not in known_operations:
                    out.append(
                        issues.unknown_reference(
                            kind="operation", name=op, section="renames.operations", resource=resource
                        )
                    )

    if known_shapes is not None:
        for name in sorted(config.ignore.shape_names):
            if name not in known_shapes:
                out.append(issues.unknown_reference(kind="shape", name=name, section="ignore.shape_names"))
        for resource, res_cfg in config.resources.items():
            if res_cfg.exceptions is None:
                continue
            for shape in res_cfg.exceptions.codes.values():
                if shape and shape not in known_shapes:
                    out.append(
                        issues.unknown_reference(
                            kind="shape", name=shape, section="exceptions.codes", resource=resource
                        )
                    )

    return out


def validate_generator_config(
    config: GeneratorConfig,
    *,
    known_resources: Optional[Collection[str]] = None,
    known_operations: Optional[Collection[str]] = None,
    known_shapes: Optional[Collection[str]] = None,
) -> List[ConfigIssue]:
    """
    Coleta todas as issues semânticas da configuração.

    Args:
        config: configuração já carregada.
        known_resources: nomes de recursos existentes na API (opcional).
        known_operations: IDs de operações existentes na API (opcional).
        known_shapes: nomes de shapes existentes na API (opcional).

    Returns:
        List[ConfigIssue]: issues na ordem dos recursos no documento;
        lista vazia quando a configuração é consistente.
    """
    out: List[ConfigIssue] = []

    for resource, cfg in config.resources.items():
        if cfg.name_field is not None and _is_blank(cfg.name_field):
            out.append(issues.empty_identifier(resource=resource, section="name_field"))
        if cfg.unpack_attributes_map is not None:
            out.extend(_check_unpack_attributes_map(resource, cfg.unpack_attributes_map))
        if cfg.renames is not None:
            out.extend(_check_renames(resource, cfg.renames))
        if cfg.exceptions is not None:
            out.extend(_check_exceptions(resource, cfg.exceptions))
        if cfg.list_operation is not None:
            out.extend(_check_list_operation(resource, cfg.list_operation))
        if config.is_resource_ignored(resource):
            out.append(issues.ignored_resource_override(resource=resource))

    out.extend(_check_references(config, known_resources, known_operations, known_shapes))
    return out


def ensure_valid_generator_config(
    config: GeneratorConfig,
    *,
    known_resources: Optional[Collection[str]] = None,
    known_operations: Optional[Collection[str]] = None,
    known_shapes: Optional[Collection[str]] = None,
) -> GeneratorConfig:
    """
    Executa a validação e falha se houver issues com severidade "error".

    Warnings são registrados no log e não bloqueiam. Retorna a própria
    configuração para permitir encadeamento após o load.

    Raises:
        ConfigValidationError: com a lista completa de issues (erros e warnings).
    """
    found = validate_generator_config(
        config,
        known_resources=known_resources,
        known_operations=known_operations,
        known_shapes=known_shapes,
    )
    for issue in found:
        if not issue.is_error:
            logger.warning("Generator config warning [{}]: {}", issue.type, issue.message)

    if any(issue.is_error for issue in found):
        raise ConfigValidationError(found)
    return config
