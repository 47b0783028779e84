# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do ACK Generator.

Este módulo garante apenas que:
- o ambiente de testes (pytest) está funcional
- o pacote pode ser importado e expõe seu namespace público

Limites explícitos:
    - Não testar lógica de schema, loader ou validação
    - Não acumular asserts funcionais
"""

import ack_generator


def test_smoke():
    """
    Smoke test mínimo do repositório.

    Invariantes:
        - O pacote raiz importa sem falhas estruturais
        - O namespace público expõe o loader e o modelo raiz
    """
    assert callable(ack_generator.load_generator_config)
    assert ack_generator.GeneratorConfig().resources == {}
