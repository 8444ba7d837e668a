"""Modelos y entidades del dominio.

Por qué:
- Aquí viven los valores puros: URLs, componentes y configuraciones de sesión.
- El dominio no conoce httpx, CLI ni Rich: solo conceptos del problema.
"""
