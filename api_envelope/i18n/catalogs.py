"""
Built-in message catalogs.

Templates use `{name}` placeholders. Exception-derived messages receive
`response_api_code`, `message` and `class`.
"""

from typing import Dict

EN: Dict[str, str] = {
    "api.ok": "OK",
    "api.no_error_message": "Error #{response_api_code}",
    "api.uncaught_exception": "Uncaught exception: {message}",
    "api.http_exception": "HTTP exception: {message}",
    "api.http_not_found": "Unknown method",
    "api.http_service_unavailable": "Service maintenance in progress",
    "api.authentication_exception": "Not authorized to access this resource",
    "api.validation_exception": "Invalid data",
}

PL: Dict[str, str] = {
    "api.ok": "OK",
    "api.no_error_message": "Błąd #{response_api_code}",
    "api.uncaught_exception": "Nieobsłużony wyjątek: {message}",
    "api.http_exception": "Wyjątek HTTP: {message}",
    "api.http_not_found": "Nieznana metoda",
    "api.http_service_unavailable": "Trwają prace serwisowe",
    "api.authentication_exception": "Brak uprawnień do tego zasobu",
    "api.validation_exception": "Nieprawidłowe dane",
}

BUILTIN_CATALOGS: Dict[str, Dict[str, str]] = {
    "en": EN,
    "pl": PL,
}
