"""Modelos de dominio y tipos de valor.

Por qué:
- Aquí viven estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no sabe nada de HTTP, pytest ni la CLI.
"""
