"""Interfaces del core.

Por qué:
- Define contratos estructurales (Protocol) que implementan los adapters.
- El core depende de la abstracción, así los servicios pueden usar un
  requester falso en tests.
"""
