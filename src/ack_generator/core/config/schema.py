"""
Schema canônico — configuração do gerador (generator.yaml).

A árvore de configuração é construída uma única vez por execução do gerador
e nunca é mutada depois: dataclasses congeladas, mapas expostos como
`FrozenMap`, sequências como `tuple` e conjuntos como `frozenset`.
Assim a mesma instância pode ser compartilhada entre workers sem lock,
copiada com `copy.deepcopy`, enviada a um process pool via pickle e usada
como chave de dicionário.

Sub-configs opcionais de um recurso usam `None` para "ausente" (usar o
comportamento padrão do gerador). Um sub-config presente porém vazio é um
valor distinto de `None`.

O parsing (`parse_generator_config`) valida apenas tipos e estrutura.
Validação semântica (colisões de rename, múltiplos owner account IDs, ...)
fica em `validation.py`.
"""

from __future__ import annotations

import collections.abc
import re
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from loguru import logger

from .errors import ConfigSchemaError


NOT_FOUND_STATUS_CODE = 404

_INT_KEY_RE = re.compile(r"[+-]?\d+")


class FrozenMap(collections.abc.Mapping):
    """
    Mapa somente-leitura, hashable e serializável (pickle/deepcopy).

    Mantém a ordem de inserção do documento. Igualdade segue a de `Mapping`:
    um `FrozenMap` é igual a qualquer mapa com os mesmos itens.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Optional[Mapping] = None) -> None:
        self._data = dict(data or {})

    def __getitem__(self, key: Any) -> Any:
        return self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __reduce__(self):
        return (FrozenMap, (self._data,))

    def __repr__(self) -> str:
        return f"FrozenMap({self._data!r})"


def _frozen_map(value: Mapping) -> FrozenMap:
    return FrozenMap(value)


def _frozen_names(value: Iterable[str], name: str) -> FrozenSet[str]:
    # frozenset("DeleteTopic") viraria um conjunto de caracteres
    if isinstance(value, str):
        raise TypeError(f"{name} must be a collection of names, not a str: {value!r}")
    return frozenset(value)


# ---------------------------------------------------------------------------
# Folhas
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldGeneratorConfig:
    """Classificação de um atributo de um attribute map."""

    # Campo pertence ao Status (observed state) e nunca é enviado em create/update
    is_read_only: bool = False
    # Valor vai para o slot compartilhado de metadata (owner account ID)
    contains_owner_account_id: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_read_only": self.is_read_only,
            "contains_owner_account_id": self.contains_owner_account_id,
        }


@dataclass(frozen=True)
class UnpackAttributesMapConfig:
    """
    Instruções para "desempacotar" um parâmetro `map[string]string` opaco em
    campos reais do recurso (padrão usado por SNS e SQS, por exemplo).

    Invariante: uma chave de atributo ausente de `fields` é excluída de toda
    a saída gerada, mesmo que a API a retorne. Omissão é exclusão.

    Atributos marcados com `contains_owner_account_id` não viram campo
    comum: vão para o slot compartilhado de metadata, e por isso não
    aparecem em `spec_field_names()` nem em `status_field_names()`.
    """

    fields: Mapping[str, FieldGeneratorConfig] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", _frozen_map(self.fields))

    def spec_field_names(self) -> Tuple[str, ...]:
        """Atributos do desired state (graváveis pelo usuário), na ordem do documento."""
        return tuple(
            name
            for name, cfg in self.fields.items()
            if not cfg.is_read_only and not cfg.contains_owner_account_id
        )

    def status_field_names(self) -> Tuple[str, ...]:
        """Atributos do observed state (somente leitura), na ordem do documento."""
        return tuple(
            name
            for name, cfg in self.fields.items()
            if cfg.is_read_only and not cfg.contains_owner_account_id
        )

    def owner_account_id_fields(self) -> Tuple[str, ...]:
        return tuple(
            name for name, cfg in self.fields.items() if cfg.contains_owner_account_id
        )

    def partition(self, attribute_keys: Iterable[str]) -> Tuple[List[str], List[str]]:
        """
        Separa chaves de atributo retornadas pela API em (spec, status).

        Chaves não listadas em `fields` e chaves de owner account ID são
        descartadas. A ordem de entrada é preservada.
        """
        spec: List[str] = []
        status: List[str] = []
        for key in attribute_keys:
            cfg = self.fields.get(key)
            if cfg is None or cfg.contains_owner_account_id:
                continue
            (status if cfg.is_read_only else spec).append(key)
        return spec, status

    def to_dict(self) -> Dict[str, Any]:
        return {"fields": {k: v.to_dict() for k, v in self.fields.items()}}


@dataclass(frozen=True)
class ExceptionsConfig:
    """HTTP status code -> nome do shape de exceção correspondente."""

    codes: Mapping[int, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "codes", _frozen_map(self.codes))

    def shape_for(self, status_code: int) -> Optional[str]:
        return self.codes.get(status_code)

    @property
    def not_found_shape(self) -> Optional[str]:
        return self.shape_for(NOT_FOUND_STATUS_CODE)

    def to_dict(self) -> Dict[str, Any]:
        return {"codes": dict(self.codes)}


@dataclass(frozen=True)
class OperationRenamesConfig:
    """Tabelas de rename de uma operação, por direção (input/output)."""

    input_fields: Mapping[str, str] = field(default_factory=dict)
    output_fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "input_fields", _frozen_map(self.input_fields))
        object.__setattr__(self, "output_fields", _frozen_map(self.output_fields))

    def renamed_input(self, name: str) -> str:
        return self.input_fields.get(name, name)

    def renamed_output(self, name: str) -> str:
        return self.output_fields.get(name, name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input_fields": dict(self.input_fields),
            "output_fields": dict(self.output_fields),
        }


@dataclass(frozen=True)
class RenamesConfig:
    """
    Renames por operação. Uma tabela nunca afeta operação que não nomeia,
    e o mesmo campo pode ter nomes diferentes em operações diferentes.
    """

    operations: Mapping[str, OperationRenamesConfig] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "operations", _frozen_map(self.operations))

    def for_operation(self, operation_id: str) -> Optional[OperationRenamesConfig]:
        return self.operations.get(operation_id)

    def input_field_name(self, operation_id: str, name: str) -> str:
        op = self.operations.get(operation_id)
        return op.renamed_input(name) if op else name

    def output_field_name(self, operation_id: str, name: str) -> str:
        op = self.operations.get(operation_id)
        return op.renamed_output(name) if op else name

    def to_dict(self) -> Dict[str, Any]:
        return {"operations": {k: v.to_dict() for k, v in self.operations.items()}}


@dataclass(frozen=True)
class ListOperationConfig:
    """
    Campos do elemento de lista que formam, juntos, a chave de match para
    APIs cuja operação List não aceita filtro e sempre retorna tudo.
    """

    match_fields: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.match_fields, str):
            raise TypeError(f"match_fields must be a sequence of names, not a str: {self.match_fields!r}")
        object.__setattr__(self, "match_fields", tuple(self.match_fields))

    def matches(self, element: Mapping[str, Any], target: Mapping[str, Any]) -> bool:
        """True se todos os match fields existem em ambos e são iguais."""
        if not self.match_fields:
            return False
        for name in self.match_fields:
            if name not in element or name not in target:
                return False
            if element[name] != target[name]:
                return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"match_fields": list(self.match_fields)}


# ---------------------------------------------------------------------------
# Recurso e raiz
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ResourceGeneratorConfig:
    """
    Overrides do gerador para um recurso.

    `name_field` nomeia o membro do input de Create que identifica o recurso.
    Quando ausente, o gerador tenta nomes convencionais por conta própria.
    Os demais sub-configs são independentes entre si.
    """

    name_field: Optional[str] = None
    unpack_attributes_map: Optional[UnpackAttributesMapConfig] = None
    exceptions: Optional[ExceptionsConfig] = None
    renames: Optional[RenamesConfig] = None
    list_operation: Optional[ListOperationConfig] = None

    @property
    def has_overrides(self) -> bool:
        return any(
            v is not None
            for v in (
                self.name_field,
                self.unpack_attributes_map,
                self.exceptions,
                self.renames,
                self.list_operation,
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        # sub-configs ausentes são omitidos (não serializados como vazios)
        out: Dict[str, Any] = {}
        if self.name_field is not None:
            out["name_field"] = self.name_field
        if self.unpack_attributes_map is not None:
            out["unpack_attributes_map"] = self.unpack_attributes_map.to_dict()
        if self.exceptions is not None:
            out["exceptions"] = self.exceptions.to_dict()
        if self.renames is not None:
            out["renames"] = self.renames.to_dict()
        if self.list_operation is not None:
            out["list_operation"] = self.list_operation.to_dict()
        return out


@dataclass(frozen=True)
class IgnoreSpec:
    """Conjuntos globais de exclusão: operações, recursos e shapes."""

    operations: FrozenSet[str] = frozenset()
    resource_names: FrozenSet[str] = frozenset()
    shape_names: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "operations", _frozen_names(self.operations, "operations"))
        object.__setattr__(self, "resource_names", _frozen_names(self.resource_names, "resource_names"))
        object.__setattr__(self, "shape_names", _frozen_names(self.shape_names, "shape_names"))

    def is_operation_ignored(self, operation_id: str) -> bool:
        return operation_id in self.operations

    def is_resource_ignored(self, resource_name: str) -> bool:
        return resource_name in self.resource_names

    def is_shape_ignored(self, shape_name: str) -> bool:
        return shape_name in self.shape_names

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operations": sorted(self.operations),
            "resource_names": sorted(self.resource_names),
            "shape_names": sorted(self.shape_names),
        }


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Raiz da configuração do gerador para uma API de serviço.

    Dois caminhos de leitura: override por nome exato de recurso
    (`get_resource_config`) e o `IgnoreSpec` global. Nenhuma validação
    cruzada com a descrição da API é feita aqui.
    """

    resources: Mapping[str, ResourceGeneratorConfig] = field(default_factory=dict)
    ignore: IgnoreSpec = field(default_factory=IgnoreSpec)

    def __post_init__(self) -> None:
        object.__setattr__(self, "resources", _frozen_map(self.resources))

    def get_resource_config(self, resource_name: str) -> Optional[ResourceGeneratorConfig]:
        """Lookup exato e case-sensitive."""
        return self.resources.get(resource_name)

    def is_resource_ignored(self, resource_name: str) -> bool:
        return self.ignore.is_resource_ignored(resource_name)

    def is_operation_ignored(self, operation_id: str) -> bool:
        return self.ignore.is_operation_ignored(operation_id)

    def is_shape_ignored(self, shape_name: str) -> bool:
        return self.ignore.is_shape_ignored(shape_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resources": {k: v.to_dict() for k, v in self.resources.items()},
            "ignore": self.ignore.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "GeneratorConfig":
        return parse_generator_config(data)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _expect(cond: bool, msg: str, location: str) -> None:
    if not cond:
        raise ConfigSchemaError(msg, location=location or None)


def _join(location: str, key: Any) -> str:
    return f"{location}.{key}" if location else str(key)


def _type_name(value: Any) -> str:
    return type(value).__name__


def _mapping(value: Any, location: str) -> Dict[Any, Any]:
    if value is None:
        return {}
    _expect(isinstance(value, dict), f"expected a mapping, got {_type_name(value)}", location)
    return value


def _warn_unknown_keys(data: Dict[Any, Any], known: Iterable[str], location: str) -> None:
    known = set(known)
    unknown = [k for k in data if k not in known]
    if unknown:
        logger.warning("Ignoring unknown generator config keys at {}: {}", location or "<root>", unknown)


def _string(value: Any, location: str) -> str:
    _expect(isinstance(value, str), f"expected a string, got {_type_name(value)}", location)
    return value


def _string_key(key: Any, location: str) -> str:
    # chaves escalares viram texto, como numa conversão YAML -> JSON
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (int, float)):
        return str(key)
    _expect(isinstance(key, str), f"expected a string key, got {_type_name(key)} {key!r}", location)
    return key


def _bool(value: Any, location: str) -> bool:
    if value is None:
        return False
    _expect(isinstance(value, bool), f"expected a boolean, got {_type_name(value)}", location)
    return value


def _int_key(key: Any, location: str) -> int:
    # bool é subclasse de int, mas `true: Shape` nunca é um status code
    if isinstance(key, int) and not isinstance(key, bool):
        return key
    if isinstance(key, str) and _INT_KEY_RE.fullmatch(key):
        return int(key)
    raise ConfigSchemaError(f"expected an integer key, got {key!r}", location=location)


def _string_list(value: Any, location: str) -> List[str]:
    if value is None:
        return []
    _expect(isinstance(value, list), f"expected a list, got {_type_name(value)}", location)
    return [_string(item, f"{location}[{i}]") for i, item in enumerate(value)]


def _string_map(value: Any, location: str) -> Dict[str, str]:
    data = _mapping(value, location)
    return {
        _string_key(k, location): _string(v, _join(location, k))
        for k, v in data.items()
    }


def _parse_field(value: Any, location: str) -> FieldGeneratorConfig:
    data = _mapping(value, location)
    _warn_unknown_keys(data, ("is_read_only", "contains_owner_account_id"), location)
    return FieldGeneratorConfig(
        is_read_only=_bool(data.get("is_read_only"), _join(location, "is_read_only")),
        contains_owner_account_id=_bool(
            data.get("contains_owner_account_id"),
            _join(location, "contains_owner_account_id"),
        ),
    )


def _parse_unpack_attributes_map(data: Dict[Any, Any], location: str) -> UnpackAttributesMapConfig:
    _warn_unknown_keys(data, ("fields",), location)
    loc = _join(location, "fields")
    fields = _mapping(data.get("fields"), loc)
    return UnpackAttributesMapConfig(
        fields={
            _string_key(k, loc): _parse_field(v, _join(loc, k))
            for k, v in fields.items()
        }
    )


def _parse_exceptions(data: Dict[Any, Any], location: str) -> ExceptionsConfig:
    _warn_unknown_keys(data, ("codes",), location)
    loc = _join(location, "codes")
    codes: Dict[int, str] = {}
    for k, v in _mapping(data.get("codes"), loc).items():
        code = _int_key(k, loc)
        _expect(code not in codes, f"status code {code} is declared twice", loc)
        codes[code] = _string(v, _join(loc, k))
    return ExceptionsConfig(codes=codes)


def _parse_operation_renames(value: Any, location: str) -> OperationRenamesConfig:
    data = _mapping(value, location)
    _warn_unknown_keys(data, ("input_fields", "output_fields"), location)
    return OperationRenamesConfig(
        input_fields=_string_map(data.get("input_fields"), _join(location, "input_fields")),
        output_fields=_string_map(data.get("output_fields"), _join(location, "output_fields")),
    )


def _parse_renames(data: Dict[Any, Any], location: str) -> RenamesConfig:
    _warn_unknown_keys(data, ("operations",), location)
    loc = _join(location, "operations")
    ops = _mapping(data.get("operations"), loc)
    return RenamesConfig(
        operations={
            _string_key(k, loc): _parse_operation_renames(v, _join(loc, k))
            for k, v in ops.items()
        }
    )


def _parse_list_operation(data: Dict[Any, Any], location: str) -> ListOperationConfig:
    _warn_unknown_keys(data, ("match_fields",), location)
    return ListOperationConfig(
        match_fields=tuple(_string_list(data.get("match_fields"), _join(location, "match_fields")))
    )


_RESOURCE_SECTIONS = {
    "unpack_attributes_map": _parse_unpack_attributes_map,
    "exceptions": _parse_exceptions,
    "renames": _parse_renames,
    "list_operation": _parse_list_operation,
}


def _parse_resource(value: Any, location: str) -> ResourceGeneratorConfig:
    data = _mapping(value, location)
    _warn_unknown_keys(data, ("name_field", *_RESOURCE_SECTIONS), location)

    name_field = data.get("name_field")
    if name_field is not None:
        name_field = _string(name_field, _join(location, "name_field"))

    sections: Dict[str, Any] = {}
    for key, parse in _RESOURCE_SECTIONS.items():
        raw = data.get(key)
        # null explícito == chave ausente
        if raw is None:
            continue
        loc = _join(location, key)
        sections[key] = parse(_mapping(raw, loc), loc)

    return ResourceGeneratorConfig(name_field=name_field, **sections)


def _parse_ignore(value: Any, location: str) -> IgnoreSpec:
    data = _mapping(value, location)
    _warn_unknown_keys(data, ("operations", "resource_names", "shape_names"), location)
    return IgnoreSpec(
        operations=frozenset(_string_list(data.get("operations"), _join(location, "operations"))),
        resource_names=frozenset(
            _string_list(data.get("resource_names"), _join(location, "resource_names"))
        ),
        shape_names=frozenset(_string_list(data.get("shape_names"), _join(location, "shape_names"))),
    )


def parse_generator_config(data: Any) -> GeneratorConfig:
    """
    Valida e materializa um `GeneratorConfig` a partir de um documento já
    decodificado (dict). `None` é tratado como documento vazio.

    Raises:
        ConfigSchemaError: se qualquer nó violar o tipo esperado.
    """
    root = _mapping(data, "")
    _warn_unknown_keys(root, ("resources", "ignore"), "")

    resources = _mapping(root.get("resources"), "resources")
    return GeneratorConfig(
        resources={
            _string_key(name, "resources"): _parse_resource(cfg, _join("resources", name))
            for name, cfg in resources.items()
        },
        ignore=_parse_ignore(root.get("ignore"), "ignore"),
    )
