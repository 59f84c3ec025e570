import re

NAMESPACE_SEPARATOR = "::"
COMPONENT_SUFFIX = "Component"
SLOT_PREFIX = "With"

_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SLOT_NAME = re.compile(r"^With[A-Z]")


def snake_case(name: str) -> str:
    """Underscore a (possibly namespaced) tag name: `Ui::HTMLCard` -> `ui_html_card`."""
    name = name.replace(NAMESPACE_SEPARATOR, "_")
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def component_identifier(tag_name: str) -> str:
    # Suffix lands on the last namespace segment: Ui::Card -> Ui::CardComponent
    return tag_name + COMPONENT_SUFFIX


def is_slot_name(tag_name: str) -> bool:
    return bool(_SLOT_NAME.match(tag_name))


def slot_name(tag_name: str) -> str:
    return snake_case(tag_name[len(SLOT_PREFIX):])
