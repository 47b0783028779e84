# src/ack_generator/core/config/loader.py
"""
Loader canônico da configuração do gerador.

Este módulo lê o arquivo de configuração (tipicamente `generator.yaml`),
decodifica o documento e o materializa em um `GeneratorConfig` imutável.

Responsabilidades do módulo:
    - Ler o arquivo inteiro a partir do caminho informado
    - Decodificar YAML ou JSON (formato inferido pela extensão)
    - Delegar a validação estrutural a `parse_generator_config`
    - Serializar um `GeneratorConfig` de volta para disco

Princípios fundamentais:
    - Falha rápida: erros de I/O e de schema são fatais
    - Nenhum valor parcial é retornado em caso de falha
    - Nenhum default é injetado além do valor zero de cada campo
    - Nenhum estado global: o chamador recebe e passa adiante a instância

Limites explícitos:
    - Não executa a validação semântica pós-load (ver `validation.py`)
    - Não consulta a descrição da API do serviço
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

import yaml  # PyYAML
from loguru import logger

from .errors import (
    ConfigFileNotFoundError,
    ConfigIOError,
    ConfigParseError,
    UnsupportedConfigFormatError,
)
from .schema import GeneratorConfig, parse_generator_config


_YAML_SUFFIXES = {".yaml", ".yml"}
_JSON_SUFFIXES = {".json"}

PathLike = Union[str, Path]


def _format_for(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in _YAML_SUFFIXES:
        return "yaml"
    if suffix in _JSON_SUFFIXES:
        return "json"
    raise UnsupportedConfigFormatError(f"unsupported generator config format: {path.suffix!r}")


def _read_text(path: Path) -> str:
    """
    Lê o conteúdo completo do arquivo de configuração.

    Raises:
        ConfigFileNotFoundError: se o arquivo não existir.
        ConfigIOError: se o arquivo não puder ser lido (diretório, permissão).
        ConfigParseError: se o conteúdo não for UTF-8 válido.
    """
    if not path.exists():
        raise ConfigFileNotFoundError(f"generator config file not found: {path}")

    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"generator config is not valid UTF-8: {e}") from e
    except FileNotFoundError as e:
        raise ConfigFileNotFoundError(f"generator config file not found: {path}") from e
    except OSError as e:
        raise ConfigIOError(f"cannot read generator config {path}: {e}") from e


def _decode(raw: str, fmt: str) -> Any:
    # documento vazio -> configuração vazia (YAML vazio já vira None)
    if not raw.strip():
        return None

    try:
        if fmt == "json":
            return json.loads(raw)
        return yaml.safe_load(raw)
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigParseError(str(e) or f"failed to parse {fmt} document") from e


def load_generator_config(path: PathLike) -> GeneratorConfig:
    """
    Carrega e materializa a configuração do gerador.

    Fluxo:
        1. Verifica existência e formato do arquivo
        2. Lê o arquivo inteiro (UTF-8)
        3. Decodifica YAML/JSON
        4. Valida tipos e estrutura via `parse_generator_config`

    Chaves ausentes (ou `null`) assumem o valor zero: mapas e listas
    vazios, sub-configs ausentes. Um documento vazio produz uma
    configuração vazia sem erro.

    Args:
        path: caminho para o arquivo de configuração.

    Returns:
        GeneratorConfig: árvore imutável, de posse exclusiva do chamador.

    Raises:
        ConfigFileNotFoundError: se o arquivo não existir.
        ConfigIOError: se o arquivo não puder ser lido.
        UnsupportedConfigFormatError: se a extensão não for suportada.
        ConfigParseError: se o texto for malformado.
        ConfigSchemaError: se o documento violar o schema.
    """
    p = Path(path)
    raw = _read_text(p)
    fmt = _format_for(p)

    config = parse_generator_config(_decode(raw, fmt))
    logger.debug(
        "Loaded generator config from {} ({} resource overrides)",
        p,
        len(config.resources),
    )
    return config


def dump_generator_config(config: GeneratorConfig, *, fmt: str = "yaml") -> str:
    """Serializa a configuração para texto YAML ou JSON."""
    data = config.to_dict()
    if fmt == "json":
        # chaves inteiras de exceptions.codes viram strings em JSON; o loader as aceita
        return json.dumps(data, indent=2) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
    raise UnsupportedConfigFormatError(f"unsupported generator config format: {fmt!r}")


def save_generator_config(config: GeneratorConfig, path: PathLike) -> None:
    """
    Persiste a configuração em disco no formato indicado pela extensão.

    Recarregar o arquivo com `load_generator_config` produz um valor igual
    ao original.
    """
    p = Path(path)
    text = dump_generator_config(config, fmt=_format_for(p))
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    logger.debug("Saved generator config to {}", p)
