# src/html_loader/utils/js_literals.py

# Characters that would end or break a single-quoted JavaScript string literal.
_ESCAPES = (
    ("\\", "\\\\"),
    ("'", "\\'"),
    ("\r", "\\r"),
    ("\n", "\\n"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def quote_single(value: str) -> str:
    """Escapes a value for use inside '...' and keeps it on one physical line."""
    for raw, escaped in _ESCAPES:
        value = value.replace(raw, escaped)
    return value


def import_statement(path: str) -> str:
    """Side-effect import framed by newlines (two generated lines)."""
    return f"\nimport '{quote_single(path)}';\n"
