"""
Lookup of directives by recipe name.
"""

from .base import Directive
from .mask import MaskDirective
from .redact import RedactDirective

DIRECTIVES: dict[str, type[Directive]] = {
    RedactDirective.NAME: RedactDirective,
    MaskDirective.NAME: MaskDirective,
}


def get_directive(name: str) -> type[Directive]:
    """
    Return the directive class registered under ``name``.

    Raises:
        KeyError: If no directive has that name
    """
    try:
        return DIRECTIVES[name]
    except KeyError:
        raise KeyError(
            f"Unknown directive '{name}'. Available: {', '.join(sorted(DIRECTIVES))}"
        ) from None
