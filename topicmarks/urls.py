from typing import Iterable, List

from pydantic import AnyUrl, TypeAdapter, ValidationError


_url_adapter = TypeAdapter(AnyUrl)


def is_valid_url(value) -> bool:
    """Return True when ``value`` parses as an absolute URL.

    Parsing follows the WHATWG URL rules, so any scheme is accepted
    (``ftp://x``, ``mailto:a@b.c``) and spaces in a path or query are fine,
    while a bare ``abc`` or ``example.com`` is rejected. The value itself is
    never rewritten; callers store what they were given.
    """
    if not isinstance(value, str):
        return False
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def filter_valid_urls(values: Iterable) -> List[str]:
    return [v for v in values if is_valid_url(v)]
