# tests/conftest.py
"""
Fixtures compartilhados para testes do ACK Generator.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos generator.yaml semelhantes ao uso real (SNS/S3)
- um writer de arquivos de configuração em diretório temporário

Decisões arquiteturais:
    - Documentos são fornecidos como string para manter os testes legíveis
    - Todo acesso a filesystem passa por `tmp_path`
    - Nenhuma fixture depende de estado global ou variáveis de ambiente

Limites explícitos:
    - Não representam configurações reais de produção
    - Não introspectam nenhuma descrição de API
"""

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def sns_like_generator_yaml() -> str:
    """
    Fixture que fornece um generator.yaml semelhante ao usado para SNS/S3.

    Cobre todos os sub-configs de recurso:
        - name_field
        - unpack_attributes_map (campos spec, status e owner account ID)
        - exceptions (404)
        - renames em duas operações distintas
        - list_operation
    e as três listas de `ignore`.

    Invariantes:
        - YAML sintaticamente válido
        - Estruturalmente válido segundo o schema
        - Semanticamente consistente (nenhuma issue na validação pós-load)

    Returns:
        str: conteúdo YAML.
    """
    return """\
resources:
  Topic:
    name_field: Name
    unpack_attributes_map:
      fields:
        DeliveryPolicy:
          is_read_only: false
        DisplayName: {}
        KmsMasterKeyId:
          is_read_only: false
        Policy:
          is_read_only: false
        EffectiveDeliveryPolicy:
          is_read_only: true
        Owner:
          is_read_only: true
          contains_owner_account_id: true
        TopicArn:
          is_read_only: true
    exceptions:
      codes:
        404: NotFoundException
    renames:
      operations:
        CreateTopic:
          input_fields:
            Name: TopicName
        DeleteTopic:
          input_fields:
            Name: TopicIdentifier
  Bucket:
    list_operation:
      match_fields:
        - Name
ignore:
  operations:
    - ListTagsForResource
  resource_names:
    - PlatformApplication
  shape_names:
    - Tag
"""


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, str], Path]:
    """
    Fixture factory que grava um documento de configuração em `tmp_path`.

    Usage::

        path = write_config("generator.yaml", "resources: {}")
    """

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
