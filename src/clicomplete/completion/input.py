"""Parsing of the completion query sent by the bash completion function.

The bash function joins ``COMP_WORDS`` with ``,`` and pipes the result to the
program, so a query looks like::

    myapp,cache,flush,--tag,=,red

The first word is the program itself and is discarded. Bash's default
``COMP_WORDBREAKS`` contains ``=``, which splits ``--tag=red`` into the three
words ``--tag``, ``=`` and ``red``; :func:`parse_input` glues them back
together.
"""

from __future__ import annotations

QUERY_SEPARATOR = ","


def parse_input(raw: str) -> list[str]:
    """Split a completion query into the words typed after the program name.

    Args:
        raw: The comma-joined command line read from stdin.

    Returns:
        The words in order, with ``--name = value`` sequences rejoined into
        ``--name=value`` (or ``--name=`` when no value follows) and empty
        words dropped.

    Example::

        >>> parse_input("myapp,--foo,=,bar")
        ['--foo=bar']
        >>> parse_input("myapp,--foo,=,--bar")
        ['--foo=', '--bar']
    """
    words = [word.strip() for word in raw.split(QUERY_SEPARATOR)[1:]]

    tokens: list[str] = []
    i = 0
    while i < len(words):
        current = words[i]
        following = words[i + 1] if i + 1 < len(words) else None
        if following == "=":
            value = words[i + 2] if i + 2 < len(words) else None
            if value is not None and not value.startswith("-"):
                tokens.append(current + "=" + value)
                i += 3
            else:
                tokens.append(current + "=")
                i += 2
        else:
            tokens.append(current)
            i += 1

    return [token for token in tokens if token]
