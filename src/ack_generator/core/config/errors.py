# src/ack_generator/core/config/errors.py
"""
Exceções canônicas da camada de configuração do gerador.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, a validação estrutural e a validação pós-load do
arquivo de configuração do gerador (generator.yaml).

Existem dois tipos fatais de erro durante o load:
    - I/O (arquivo ausente, ilegível, permissão negada)
    - schema/parse (documento malformado ou tipo incompatível)

Ambos interrompem o load por completo: nenhum valor parcial é retornado.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Erros de I/O também são `OSError`
    - Erros de schema também são `ValueError`

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende do gerador nem da descrição da API
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from ack_generator.core.errors import ConfigIssue


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do gerador.

    Permite captura genérica de qualquer falha de configuração,
    independente da fase (load ou validação pós-load).
    """


class ConfigIOError(ConfigError, OSError):
    """
    Falha de I/O ao ler o arquivo de configuração.

    Cobre diretórios no lugar de arquivos, permissão negada e demais
    erros do sistema operacional durante a leitura.
    """


class ConfigFileNotFoundError(ConfigIOError, FileNotFoundError):
    """Arquivo de configuração não existe no caminho informado."""


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato do arquivo de configuração não suportado pelo loader.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class ConfigSchemaError(ConfigError, ValueError):
    """
    Conteúdo do documento viola o schema esperado.

    Exemplo:
        - chave não inteira em `exceptions.codes`
        - `is_read_only` com valor não booleano
        - raiz do documento que não é um mapa

    O atributo `location` aponta o caminho pontilhado do nó inválido
    (ex.: `resources.Topic.exceptions.codes`).
    """

    def __init__(self, message: str, *, location: Optional[str] = None) -> None:
        self.location = location
        if location:
            message = f"{location}: {message}"
        super().__init__(message)


class ConfigParseError(ConfigSchemaError):
    """Falha ao parsear o texto YAML/JSON (sintaxe ou codificação)."""


class ConfigValidationError(ConfigError):
    """
    Configuração carregada possui problemas semânticos.

    Levantada apenas pela validação pós-load, nunca pelo loader.
    Carrega a lista completa de issues encontradas em `issues`,
    para que o operador corrija tudo de uma vez.
    """

    def __init__(self, issues: Sequence["ConfigIssue"]) -> None:
        self.issues: List["ConfigIssue"] = list(issues)
        lines = [f"{len(self.issues)} generator config issue(s):"]
        lines.extend(f"  - [{i.type}] {i.message}" for i in self.issues)
        super().__init__("\n".join(lines))
