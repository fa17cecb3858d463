"""Localized error messages.

Messages are keyed by their English template; a request picks its locale
with the ``lang`` query parameter or, failing that, ``Accept-Language``.
"""

from __future__ import annotations

from typing import Any

from starlette.requests import Request

DEFAULT_LOCALE = "en"

_CATALOGS: dict[str, dict[str, str]] = {
    "es": {
        "Bad request": "Solicitud incorrecta",
        "API not found": "API no encontrada",
        "Internal server error": "Error interno del servidor",
        "Invalid request": "Solicitud no válida",
        "Username or password invalid.": "Usuario o contraseña no válidos.",
        "Facebook authentication failed": "Falló la autenticación con Facebook",
        "Invalid token": "Token no válido",
        "Password reset token has expired": (
            "El token para restablecer la contraseña ha caducado"
        ),
        "The account is disabled": "La cuenta está deshabilitada",
        "User already exists": "El usuario ya existe",
        "Invalid confirmation token": "Token de confirmación no válido",
        "The password for this user has already been requested within {hours} hours.": (
            "La contraseña de este usuario ya fue solicitada en las últimas "
            "{hours} horas."
        ),
        "No such user exists": "No existe el usuario",
        "User not found": "Usuario no encontrado",
        "You can not follow yourself": "No puedes seguirte a ti mismo",
        "Media not found": "Contenido no encontrado",
        "Access Denied": "Acceso denegado",
        "Access Denied - You don't have permission to: {action}": (
            "Acceso denegado - No tienes permiso para: {action}"
        ),
        "update user": "actualizar usuario",
        "delete user": "eliminar usuario",
        "delete media": "eliminar contenido",
        '"token" length must be {length} characters long': (
            'la longitud de "token" debe ser de {length} caracteres'
        ),
    },
}

SUPPORTED_LOCALES = frozenset({DEFAULT_LOCALE, *_CATALOGS})


def _normalize(tag: str) -> str | None:
    primary = tag.split(";", 1)[0].strip().replace("_", "-").split("-", 1)[0].lower()
    return primary if primary in SUPPORTED_LOCALES else None


def negotiate_locale(
    lang: str | None, accept_language: str | None, default: str = DEFAULT_LOCALE
) -> str:
    """Pick the first supported locale from an explicit tag or the header."""
    if lang:
        locale = _normalize(lang)
        if locale:
            return locale
    for tag in (accept_language or "").split(","):
        if not tag.strip():
            continue
        locale = _normalize(tag)
        if locale:
            return locale
    return default


def request_locale(request: Request) -> str:
    settings = getattr(request.app.state, "settings", None)
    default = getattr(settings, "default_locale", DEFAULT_LOCALE)
    return negotiate_locale(
        request.query_params.get("lang"),
        request.headers.get("accept-language"),
        default,
    )


def translate(template: str, locale: str, **params: Any) -> str:
    """Render ``template`` in ``locale``, translating string parameters too."""
    catalog = _CATALOGS.get(locale, {})
    rendered_params = {
        key: catalog.get(value, value) if isinstance(value, str) else value
        for key, value in params.items()
    }
    text = catalog.get(template, template)
    return text.format(**rendered_params) if rendered_params else text


__all__ = [
    "DEFAULT_LOCALE",
    "SUPPORTED_LOCALES",
    "negotiate_locale",
    "request_locale",
    "translate",
]
