# src/ack_generator/core/config/hashing.py
"""
Hashing canônico da configuração do gerador.

O hash identifica estruturalmente a configuração que dirigiu uma execução
do gerador, permitindo rastrear qual generator.yaml produziu um controller.

Política de hashing:
    - Serialização JSON canônica de `GeneratorConfig.to_dict()`
    - Ordenação estável de chaves
    - Separadores compactos
    - Codificação UTF-8
    - SHA-256

Invariantes:
    - Configurações equivalentes produzem o mesmo hash,
      independente da ordem das chaves no documento original
    - O valor é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json
from typing import Any, Dict, Union

from .schema import GeneratorConfig


def compute_config_hash(config: Union[GeneratorConfig, Dict[str, Any]]) -> str:
    """
    Gera o hash SHA-256 determinístico da configuração.

    Aceita tanto um `GeneratorConfig` quanto sua representação `dict`
    (como produzida por `to_dict()`).

    Raises:
        TypeError: se o objeto não for `GeneratorConfig` nem `dict`.
    """
    if isinstance(config, GeneratorConfig):
        config = config.to_dict()

    if not isinstance(config, dict):
        raise TypeError(
            f"config para hashing deve ser GeneratorConfig ou dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
