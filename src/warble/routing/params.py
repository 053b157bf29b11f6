"""Path placeholder detection.

Route paths mark parameters either Angular-style (``:id``) or brace-style
(``{id}`` / ``{id:int}``). Placeholders are never dictionary-translated;
their live value is carried through instead.
"""


def is_placeholder(segment: str) -> bool:
    """Return True if *segment* is a parameter placeholder."""
    if segment.startswith(":") and len(segment) > 1:
        return True
    return len(segment) > 2 and segment.startswith("{") and segment.endswith("}")


def placeholder_name(segment: str) -> str | None:
    """Return the parameter name of a placeholder segment, or None.

    Examples::

        ":id"       -> "id"
        "{id:int}"  -> "id"
        "products"  -> None
    """
    if not is_placeholder(segment):
        return None
    if segment.startswith(":"):
        return segment[1:]
    return segment[1:-1].split(":", 1)[0]
