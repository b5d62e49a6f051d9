"""Request parameter extraction."""

from collections.abc import Mapping


def read_parameter(
    name: str,
    query: Mapping[str, str] | None,
    form: Mapping | None,
    *,
    allow_get: bool = True,
    allow_post: bool = True,
    default: str | None = None,
) -> str | None:
    """Read a parameter from the POST body or the query string.

    The body wins over the query string when both sources are enabled and
    carry a value. Empty strings count as "not provided", so an empty body
    value falls through to the query string and then to ``default``.

    Args:
        name: Parameter name.
        query: Query string parameters (the GET source).
        form: Parsed body fields (the POST source), or None for non-POST requests.
        allow_get: Whether the query string may be used.
        allow_post: Whether the body may be used.
        default: Value returned when no enabled source has the parameter.

    Returns:
        The parameter value or ``default``.
    """
    if allow_post and form is not None:
        value = form.get(name)
        # Uploaded files are not a valid file name
        if isinstance(value, str) and value != "":
            return value

    if allow_get and query is not None:
        value = query.get(name)
        if isinstance(value, str) and value != "":
            return value

    return default
