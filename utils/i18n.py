# utils/i18n.py
import re

_PLACEHOLDER = re.compile(r"@([A-Za-z_][A-Za-z0-9_]*)")


def t(template: str, **args) -> str:
    """Fill ``@name`` placeholders in a user-facing string."""
    if not args:
        return template

    def _sub(m):
        key = m.group(1)
        return str(args[key]) if key in args else m.group(0)

    return _PLACEHOLDER.sub(_sub, template)


def format_plural(count: int, singular: str, plural: str, **args) -> str:
    """Pick singular/plural wording; ``@count`` is always available."""
    template = singular if int(count) == 1 else plural
    return t(template, count=count, **args)
