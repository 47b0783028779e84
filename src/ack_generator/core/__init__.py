# src/ack_generator/core/__init__.py
"""
Core do ACK Generator.

Reúne o schema de configuração do gerador (config) e o catálogo canônico
de issues de validação (errors).

O core é projetado para ser:
    - determinístico
    - testável de forma isolada (configurações injetadas explicitamente)
    - livre de dependências do gerador, de templates ou de CLI
"""
