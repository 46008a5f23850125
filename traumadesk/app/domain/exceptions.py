# domain/exceptions.py
"""
Excepciones del dominio.

Propósito:
- Distinguir errores de reglas de negocio (validación) de errores técnicos (disco/UI).
- Permitir que la capa de aplicación/UI traduzca errores a mensajes para el usuario.
"""


class DomainError(Exception):
    """Error base del dominio."""


class ValidationError(DomainError):
    """Entidad en estado inválido (RUT incorrecto, campo obligatorio vacío, rango fuera de límites)."""


class StorageError(DomainError):
    """Fallo de lectura/escritura en el directorio de pacientes (sin permisos, disco lleno, archivo corrupto)."""
