# src/ack_generator/core/config/__init__.py
"""
Camada de configuração do gerador de controllers.

Este pacote define o schema declarativo que orienta o gerador ao traduzir
a descrição da API de um serviço em código de controller: quais campos
existem, onde ficam, como erros e renames são resolvidos.

Responsabilidades do pacote:
    - Modelo de configuração imutável (schema.py)
    - Carregamento e persistência YAML/JSON (loader.py)
    - Validação semântica pós-load (validation.py)
    - Hash canônico para rastreabilidade (hashing.py)

Ciclo de vida:
    - A árvore é carregada uma vez por execução do gerador
    - Nunca é mutada após o load
    - É passada explicitamente ao gerador (sem estado global)

Limites explícitos:
    - Não introspecta a descrição da API
    - Não emite código
    - Não trata argumentos de CLI
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigFileNotFoundError,
    ConfigIOError,
    ConfigParseError,
    ConfigSchemaError,
    ConfigValidationError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash  # noqa: F401
from .loader import (  # noqa: F401
    dump_generator_config,
    load_generator_config,
    save_generator_config,
)
from .schema import (  # noqa: F401
    ExceptionsConfig,
    FieldGeneratorConfig,
    GeneratorConfig,
    IgnoreSpec,
    ListOperationConfig,
    OperationRenamesConfig,
    RenamesConfig,
    ResourceGeneratorConfig,
    UnpackAttributesMapConfig,
    parse_generator_config,
)
from .validation import (  # noqa: F401
    ensure_valid_generator_config,
    validate_generator_config,
)
