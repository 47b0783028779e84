# src/ack_generator/__init__.py
"""
ACK Generator — schema de configuração do gerador de controllers.

Este pacote raiz define o namespace público do schema declarativo
(generator.yaml) consumido pelo gerador de código que traduz a descrição
da API de um serviço de nuvem em código de controller.

Arquitetura em alto nível:
    - core.config → schema, loader, validação pós-load e hashing
    - core.errors → catálogo canônico de issues de validação

Limites explícitos:
    - Não introspecta a descrição da API
    - Não emite código nem templates
    - Não trata argumentos de CLI
"""

from .core.config import (
    GeneratorConfig,
    load_generator_config,
    validate_generator_config,
)

__version__ = "0.1.0"

__all__ = [
    "GeneratorConfig",
    "load_generator_config",
    "validate_generator_config",
]
