"""
Responsibility: render the template file with the helper functions
templates are allowed to call
"""

from pathlib import Path
from typing import Any, Callable

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..dns.resolver import Resolver
from ..errors import RenderError


def add(i: int, j: int) -> int:
    return int(i) + int(j)


def addf(i: float, j: float) -> float:
    return float(i) + float(j)


def mul(i: int, j: int) -> int:
    return int(i) * int(j)


def mulf(i: float, j: float) -> float:
    return float(i) * float(j)


def div(i: int, j: int) -> int:
    # integer division truncating toward zero, e.g. div(-7, 2) == -3
    i, j = int(i), int(j)
    quotient = abs(i) // abs(j)
    return quotient if (i < 0) == (j < 0) else -quotient


def divf(i: float, j: float) -> float:
    return float(i) / float(j)


def template_functions(resolver: Resolver) -> dict[str, Callable[..., Any]]:
    return {
        "lookupHost": resolver.safe_lookup,
        "add": add,
        "addf": addf,
        "mul": mul,
        "mulf": mulf,
        "div": div,
        "divf": divf,
    }


class TemplateRenderer:
    def __init__(self, path: str | Path, resolver: Resolver) -> None:
        self._path = Path(path)
        self._env = Environment(
            loader=FileSystemLoader(str(self._path.parent)),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            # no cache, every render reads the file as it is now
            cache_size=0,
            autoescape=False,
        )
        self._env.globals.update(template_functions(resolver))

    @property
    def path(self) -> Path:
        return self._path

    def render(self, **context: Any) -> bytes:
        """
        :raises RenderError: if the template cannot be loaded or rendered,
            including errors raised by the helper functions
        """
        try:
            template = self._env.get_template(self._path.name)
            return template.render(**context).encode("utf-8")
        except Exception as e:
            raise RenderError(str(self._path), e) from e
