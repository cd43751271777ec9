"""
Variable binding and interpolation

Variables are declared on <include> tags as $-prefixed attributes:

    <include file="card.html" $title="Hello" $size="large"></include>

and referenced in the included content (or in the file attribute itself)
between the configured delimiters, optionally with a default value:

    <h2 class="{{$size=small}}">{{ $title }}</h2>
"""

import re
from typing import Dict, Mapping, Optional, Tuple

SIGIL = '$'


def vars_extract(attributes: Mapping[str, Optional[str]]) -> Dict[str, str]:
    """
    Collect the variables declared by a tag's attributes

    Args:
        attributes: Element attributes (None for bare attributes)

    Returns:
        Mapping of variable name (sigil stripped) to value

    Example:
        >>> vars_extract({'file': 'a.html', '$title': 'Hi', 'class': 'x'})
        {'title': 'Hi'}
    """
    return {
        name[len(SIGIL):]: value or ''
        for name, value in attributes.items()
        if name.startswith(SIGIL)
    }


def scopes_merge(inherited: Mapping[str, str], local: Mapping[str, str]) -> Dict[str, str]:
    """Return a new scope: inherited overridden key-by-key by local"""
    return {**inherited, **local}


def pattern_build(delimiters: Tuple[str, str]) -> re.Pattern[str]:
    """Compile the placeholder pattern for a delimiter pair"""
    open_, close = delimiters
    return re.compile(rf'{re.escape(open_)}\s*{re.escape(SIGIL)}(.*?)\s*{re.escape(close)}')


def variables_interpolate(
    text: str,
    scope: Mapping[str, str],
    delimiters: Tuple[str, str] = ('{{', '}}'),
) -> str:
    """
    Replace {{$key}} and {{$key=default}} placeholders in text

    The value is scope[key] when bound (even if empty), else the default
    when one is given, else the empty string. Text that does not match
    the placeholder pattern is left as is.

    Args:
        text: Text to interpolate (markup, attribute value, file path)
        scope: Variable bindings
        delimiters: Open/close markers

    Returns:
        Interpolated text

    Example:
        >>> variables_interpolate('Hi {{$name=you}}!', {})
        'Hi you!'
        >>> variables_interpolate('Hi {{ $name }}!', {'name': 'Ada'})
        'Hi Ada!'
    """
    def placeholder_replace(match: re.Match[str]) -> str:
        key, sep, default = match.group(1).partition('=')
        key = key.strip()
        if key in scope:
            return scope[key]
        if sep:
            return default.strip()
        return ''

    return pattern_build(delimiters).sub(placeholder_replace, text)
