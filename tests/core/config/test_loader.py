# tests/core/config/test_loader.py
"""
Testes do carregador da configuração do gerador (load_generator_config).

Os testes asseguram que:
- um documento vazio produz configuração vazia, sem erro
- arquivo ausente/ilegível produz erro de I/O e nenhum valor
- tipos incompatíveis produzem erro de schema com localização
- chaves ausentes ou `null` assumem o valor zero
- sub-config presente porém vazio é distinto de sub-config ausente

Invariantes:
    - Nenhuma configuração parcial é retornada em caso de erro
    - Erros de I/O são `OSError`; erros de schema são `ValueError`

Limites explícitos:
    - Não valida semântica (ver test_validation.py)
    - Não valida round-trip de persistência (ver test_round_trip.py)
"""

import os
from pathlib import Path

import pytest

from ack_generator.core.config.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigIOError,
    ConfigParseError,
    ConfigSchemaError,
    UnsupportedConfigFormatError,
)
from ack_generator.core.config.loader import load_generator_config
from ack_generator.core.config.schema import (
    FieldGeneratorConfig,
    GeneratorConfig,
    IgnoreSpec,
)


def test_empty_document_yields_empty_config(write_config):
    """
    Verifica que um documento vazio é uma configuração válida.

    Invariantes:
        - `resources` é um mapa vazio
        - `ignore` é o IgnoreSpec de valor zero
        - nenhuma exceção é levantada
    """
    path = write_config("generator.yaml", "")
    config = load_generator_config(path)

    assert isinstance(config, GeneratorConfig)
    assert dict(config.resources) == {}
    assert config.ignore == IgnoreSpec()
    assert config == GeneratorConfig()


@pytest.mark.parametrize("content", ["   \n\n", "---\n", "# only a comment\n"])
def test_blank_yaml_documents_yield_empty_config(write_config, content):
    assert load_generator_config(write_config("generator.yaml", content)) == GeneratorConfig()


def test_empty_json_document_yields_empty_config(write_config):
    assert load_generator_config(write_config("generator.json", "")) == GeneratorConfig()


def test_missing_file_raises_io_error(tmp_path: Path):
    """
    Verifica que um caminho inexistente é tratado como erro de I/O fatal.

    Invariantes:
        - A exceção é `ConfigFileNotFoundError`
        - Ela também é `ConfigIOError`, `FileNotFoundError` e `OSError`
    """
    missing = tmp_path / "does-not-exist.yaml"
    with pytest.raises(ConfigFileNotFoundError) as exc_info:
        load_generator_config(missing)

    err = exc_info.value
    assert isinstance(err, ConfigIOError)
    assert isinstance(err, FileNotFoundError)
    assert isinstance(err, OSError)
    assert isinstance(err, ConfigError)
    assert "does-not-exist.yaml" in str(err)


def test_directory_path_raises_io_error(tmp_path: Path):
    directory = tmp_path / "generator.yaml"
    directory.mkdir()
    with pytest.raises(ConfigIOError):
        load_generator_config(directory)


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="root lê o arquivo independentemente das permissões",
)
def test_unreadable_file_raises_io_error(write_config):
    """
    Verifica que permissão negada é tratada como erro de I/O fatal.

    Invariantes:
        - A exceção é `ConfigIOError` (e portanto `OSError`)
        - Não é confundida com arquivo ausente
    """
    path = write_config("generator.yaml", "resources: {}\n")
    path.chmod(0o000)
    try:
        with pytest.raises(ConfigIOError) as exc_info:
            load_generator_config(path)
    finally:
        path.chmod(0o644)

    assert not isinstance(exc_info.value, ConfigFileNotFoundError)
    assert isinstance(exc_info.value, OSError)


def test_numeric_keys_are_read_as_strings(write_config):
    """
    Verifica que chaves escalares não textuais (int, float) viram texto.
    """
    path = write_config(
        "generator.yaml",
        """\
resources:
  Topic:
    renames:
      operations:
        CreateTopic:
          input_fields:
            1: Y
            2.5: Z
    unpack_attributes_map:
      fields:
        7:
          is_read_only: true
  1234: {}
""",
    )
    config = load_generator_config(path)

    renames = config.resources["Topic"].renames.for_operation("CreateTopic")
    assert dict(renames.input_fields) == {"1": "Y", "2.5": "Z"}
    assert list(config.resources["Topic"].unpack_attributes_map.fields) == ["7"]
    assert config.get_resource_config("1234") is not None


def test_accepts_str_path(write_config):
    path = write_config("generator.yaml", "resources: {}\n")
    assert load_generator_config(str(path)) == GeneratorConfig()


def test_non_integer_exception_code_raises_schema_error(write_config):
    path = write_config(
        "generator.yaml",
        """\
resources:
  Topic:
    exceptions:
      codes:
        not_found: NotFoundException
""",
    )
    with pytest.raises(ConfigSchemaError) as exc_info:
        load_generator_config(path)

    assert isinstance(exc_info.value, ValueError)
    assert exc_info.value.location == "resources.Topic.exceptions.codes"


def test_boolean_exception_code_raises_schema_error(write_config):
    path = write_config(
        "generator.yaml",
        "resources:\n  Topic:\n    exceptions:\n      codes:\n        true: NotFoundException\n",
    )
    with pytest.raises(ConfigSchemaError):
        load_generator_config(path)


def test_quoted_integer_exception_code_is_accepted(write_config):
    path = write_config(
        "generator.yaml",
        "resources:\n  Topic:\n    exceptions:\n      codes:\n        '404': NotFoundException\n",
    )
    config = load_generator_config(path)
    assert dict(config.resources["Topic"].exceptions.codes) == {404: "NotFoundException"}


def test_duplicate_exception_code_raises_schema_error(write_config):
    path = write_config(
        "generator.yaml",
        "resources:\n  Topic:\n    exceptions:\n      codes:\n        404: A\n        '404': B\n",
    )
    with pytest.raises(ConfigSchemaError):
        load_generator_config(path)


def test_non_boolean_read_only_flag_raises_schema_error(write_config):
    path = write_config(
        "generator.yaml",
        """\
resources:
  Topic:
    unpack_attributes_map:
      fields:
        Policy:
          is_read_only: sometimes
""",
    )
    with pytest.raises(ConfigSchemaError) as exc_info:
        load_generator_config(path)

    assert exc_info.value.location == "resources.Topic.unpack_attributes_map.fields.Policy.is_read_only"


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "resources: [Topic]\n",
        "ignore:\n  operations: DeleteTopic\n",
        "ignore:\n  shape_names: [1, 2]\n",
        "resources:\n  Topic:\n    name_field: [Name]\n",
        "resources:\n  Bucket:\n    list_operation:\n      match_fields: Name\n",
        "resources:\n  Topic:\n    renames:\n      operations:\n        CreateTopic:\n          input_fields: [Name]\n",
    ],
)
def test_type_mismatches_raise_schema_error(write_config, content):
    with pytest.raises(ConfigSchemaError):
        load_generator_config(write_config("generator.yaml", content))


def test_malformed_yaml_raises_parse_error(write_config):
    path = write_config("generator.yaml", "resources:\n  Topic: [unclosed\n")
    with pytest.raises(ConfigParseError) as exc_info:
        load_generator_config(path)
    assert isinstance(exc_info.value, ConfigSchemaError)


def test_malformed_json_raises_parse_error(write_config):
    path = write_config("generator.json", '{"resources": ')
    with pytest.raises(ConfigParseError):
        load_generator_config(path)


def test_non_utf8_content_raises_parse_error(tmp_path: Path):
    path = tmp_path / "generator.yaml"
    path.write_bytes(b"resources:\n  \xff\xfe: {}\n")
    with pytest.raises(ConfigParseError):
        load_generator_config(path)


def test_unsupported_suffix_is_rejected(write_config):
    path = write_config("generator.toml", "resources = {}\n")
    with pytest.raises(UnsupportedConfigFormatError):
        load_generator_config(path)


def test_json_document_is_loaded(write_config):
    path = write_config(
        "generator.json",
        '{"resources": {"Topic": {"exceptions": {"codes": {"404": "NotFoundException"}}}},'
        ' "ignore": {"operations": ["DeleteTopic"]}}',
    )
    config = load_generator_config(path)
    assert config.resources["Topic"].exceptions.not_found_shape == "NotFoundException"
    assert config.ignore.operations == frozenset({"DeleteTopic"})


def test_sns_like_document_is_fully_loaded(write_config, sns_like_generator_yaml):
    config = load_generator_config(write_config("generator.yaml", sns_like_generator_yaml))

    assert list(config.resources) == ["Topic", "Bucket"]

    topic = config.resources["Topic"]
    assert topic.name_field == "Name"
    assert topic.unpack_attributes_map.fields["DisplayName"] == FieldGeneratorConfig()
    assert topic.unpack_attributes_map.fields["Owner"] == FieldGeneratorConfig(
        is_read_only=True, contains_owner_account_id=True
    )
    assert dict(topic.exceptions.codes) == {404: "NotFoundException"}
    assert topic.renames.input_field_name("CreateTopic", "Name") == "TopicName"
    assert topic.list_operation is None

    bucket = config.resources["Bucket"]
    assert bucket.name_field is None
    assert bucket.unpack_attributes_map is None
    assert bucket.exceptions is None
    assert bucket.renames is None
    assert bucket.list_operation.match_fields == ("Name",)

    assert config.ignore.operations == frozenset({"ListTagsForResource"})
    assert config.ignore.resource_names == frozenset({"PlatformApplication"})
    assert config.ignore.shape_names == frozenset({"Tag"})


def test_missing_and_null_keys_take_zero_values(write_config):
    """
    Verifica que chaves ausentes e `null` explícito são equivalentes.

    Invariantes:
        - Sub-configs `null` permanecem ausentes (`None`)
        - Listas `null` viram conjuntos vazios
        - Flags booleanas ausentes valem `False`
    """
    path = write_config(
        "generator.yaml",
        """\
resources:
  Topic:
    name_field: null
    exceptions: null
    renames:
    unpack_attributes_map:
      fields:
        Policy:
ignore:
  operations: null
""",
    )
    config = load_generator_config(path)
    topic = config.resources["Topic"]

    assert topic.name_field is None
    assert topic.exceptions is None
    assert topic.renames is None
    assert topic.unpack_attributes_map.fields["Policy"] == FieldGeneratorConfig(
        is_read_only=False, contains_owner_account_id=False
    )
    assert config.ignore == IgnoreSpec()


def test_present_but_empty_is_distinct_from_absent(write_config):
    path = write_config(
        "generator.yaml",
        """\
resources:
  Topic:
    exceptions: {}
    renames:
      operations: {}
  Queue: {}
""",
    )
    config = load_generator_config(path)

    topic = config.resources["Topic"]
    assert topic.exceptions is not None
    assert dict(topic.exceptions.codes) == {}
    assert topic.renames is not None
    assert topic.has_overrides

    queue = config.resources["Queue"]
    assert queue.exceptions is None
    assert not queue.has_overrides


def test_unknown_keys_are_ignored(write_config):
    path = write_config(
        "generator.yaml",
        """\
operations:
  CreateTopic:
    output_wrapper_field_path: Topic
resources:
  Topic:
    fields:
      Tags:
        compare:
          is_ignored: true
    name_field: Name
""",
    )
    config = load_generator_config(path)
    assert list(config.resources) == ["Topic"]
    assert config.resources["Topic"].name_field == "Name"


def test_resource_lookup_is_exact_and_case_sensitive(write_config, sns_like_generator_yaml):
    config = load_generator_config(write_config("generator.yaml", sns_like_generator_yaml))

    assert config.get_resource_config("Topic") is config.resources["Topic"]
    assert config.get_resource_config("topic") is None
    assert config.get_resource_config("Topics") is None
