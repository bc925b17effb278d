"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan las operaciones concretas.
- Permite que la CLI y los tests dependan del contrato y no de cada clase.
"""
