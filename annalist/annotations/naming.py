"""
Conversions between test method names and human-readable titles.
"""

import re

_ARGUMENT_SEPARATORS = ("[", ":")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_TEST_PREFIX = re.compile(r"^test(?:_|(?=[A-Z0-9]))")


def with_no_arguments(method_name: str) -> str:
    """Strip parameterisation from a method name: ``"test_login[chrome]"`` -> ``"test_login"``."""
    end = len(method_name)
    for separator in _ARGUMENT_SEPARATORS:
        index = method_name.find(separator)
        if index != -1:
            end = min(end, index)
    return method_name[:end].strip()


def humanize(method_name: str) -> str:
    """
    Turn a method name into a sentence.

    ``shouldLoginWithValidUser`` and ``test_should_login_with_valid_user`` both
    become ``"Should login with valid user"``. Acronyms are kept as written.
    """
    name = _TEST_PREFIX.sub("", with_no_arguments(method_name))
    words = []
    for chunk in name.split("_"):
        words.extend(part for part in _CAMEL_BOUNDARY.split(chunk) if part)
    if not words:
        return method_name
    words = [word if word.isupper() and len(word) > 1 else word.lower() for word in words]
    sentence = " ".join(words)
    return sentence[0].upper() + sentence[1:]
