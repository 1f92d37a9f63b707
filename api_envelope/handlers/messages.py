"""
Message rendering for error envelopes.

Resolves an application code to its message key through the code registry
and lets the translator substitute placeholders into the matching template.
"""

from typing import Any, Dict, Mapping, Optional

from starlette.exceptions import HTTPException as StarletteHTTPException

from api_envelope.interfaces import ICodeRegistry, ITranslator


def qualified_class_name(error: BaseException) -> str:
    """Returns the fully qualified class name of an exception."""
    cls = type(error)
    module = cls.__module__
    if module == "builtins":
        return cls.__qualname__
    return f"{module}.{cls.__qualname__}"


def error_message_text(error: BaseException) -> str:
    """Returns the exception's own message, trimmed.

    HTTP exceptions keep their message in `detail`; any other exception's
    message is its string form.
    """
    if isinstance(error, StarletteHTTPException):
        detail = error.detail
        text = detail if isinstance(detail, str) else ""
    else:
        text = str(error)
    return text.strip()


def exception_placeholders(error: BaseException, api_code: int) -> Dict[str, Any]:
    """Builds the placeholders available to exception-derived messages.

    An empty or whitespace-only message is replaced by the exception's class
    name so the rendered text is never blank.
    """
    class_name = qualified_class_name(error)
    return {
        "response_api_code": api_code,
        "message": error_message_text(error) or class_name,
        "class": class_name,
    }


class MessageResolver:
    """Renders localized messages for application codes."""

    def __init__(self, registry: ICodeRegistry, translator: ITranslator):
        self.registry = registry
        self.translator = translator

    def render(
        self,
        api_code: int,
        placeholders: Optional[Mapping[str, Any]] = None,
        locale: Optional[str] = None,
    ) -> str:
        """Returns the localized message for an application code.

        Args:
            api_code: The application code to render a message for.
            placeholders: Named values substituted into the template.
            locale: Locale override.

        Raises:
            UnknownApiCodeError: If the code has no message key.
            TranslationMissingError: If the key has no translation.
        """
        key = self.registry.message_key_for(api_code)
        return self.translator.lookup(key, placeholders, locale=locale)

    def render_exception(self, api_code: int, error: BaseException, locale: Optional[str] = None) -> str:
        """Renders the message for an exception using its standard placeholders."""
        return self.render(api_code, exception_placeholders(error, api_code), locale=locale)
