"""Text transformations applied to finished output."""

import re
from typing import Optional

# class="..." or className="...", not part of a longer attribute name (data-class=)
CLASS_ATTRIBUTE = re.compile(r'(?<![\w-])(class(?:Name)?)="([^"]*)"')


def add_class_prefix(code: str, prefix: Optional[str]) -> str:
    """Prefix every class of every class/className attribute.

    ``class="flex p-4"`` with prefix ``tw-`` becomes ``class="tw-flex tw-p-4"``.
    Other attributes and string literals are left alone; an empty prefix
    returns ``code`` unchanged.
    """
    if not prefix:
        return code

    def _replace(match: re.Match) -> str:
        attribute, classes = match.group(1), match.group(2)
        prefixed = ' '.join(f"{prefix}{name}" for name in classes.split())
        return f'{attribute}="{prefixed}"'

    return CLASS_ATTRIBUTE.sub(_replace, code)


def component_identifier(name: str) -> str:
    """Type name for a component ("my card / v2" -> "MyCardV2")."""
    words = re.findall(r'[A-Za-z0-9]+', name)
    identifier = ''.join(word[:1].upper() + word[1:] for word in words)
    if not identifier:
        return "Component"
    if identifier[0].isdigit():
        return f"Component{identifier}"
    return identifier
