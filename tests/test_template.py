from pathlib import Path
from typing import NamedTuple

import pytest

from dns_gen.dns.resolver import Resolver
from dns_gen.errors import RenderError
from dns_gen.reaction.template import TemplateRenderer, add, addf, div, divf, mul, mulf

from .conftest import DummyResolver


class ArithmeticTestPairT(NamedTuple):
    result: int | float
    expected: int | float


arithmetic_test_pairs = [
    ArithmeticTestPairT(result=add(2, 3), expected=5),
    ArithmeticTestPairT(result=addf(0.5, 0.25), expected=0.75),
    ArithmeticTestPairT(result=mul(4, 5), expected=20),
    ArithmeticTestPairT(result=mulf(1.5, 2.0), expected=3.0),
    ArithmeticTestPairT(result=div(7, 2), expected=3),
    ArithmeticTestPairT(result=div(-7, 2), expected=-3),
    ArithmeticTestPairT(result=div(7, -2), expected=-3),
    ArithmeticTestPairT(result=divf(7.0, 2.0), expected=3.5),
]


@pytest.mark.parametrize("result, expected", arithmetic_test_pairs)
def test_arithmetic_helpers(result: int | float, expected: int | float):
    assert result == expected
    assert type(result) is type(expected)


def write_template(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "haproxy.cfg.tmpl"
    path.write_text(text)
    return path


def test_render_with_lookup_host(tmp_path: Path):
    path = write_template(
        tmp_path,
        "{% for ip in lookupHost('svc.internal') %}server s{{ loop.index }} {{ ip }}:80\n{% endfor %}",
    )
    resolver = DummyResolver({"svc.internal": [["10.0.0.2", "10.0.0.1"]]})

    content = TemplateRenderer(path, resolver).render()

    assert content == b"server s1 10.0.0.1:80\nserver s2 10.0.0.2:80\n"


def test_lookup_failure_renders_empty_list(tmp_path: Path):
    path = write_template(tmp_path, "count={{ lookupHost('missing.internal') | length }}\n")

    content = TemplateRenderer(path, DummyResolver()).render()

    assert content == b"count=0\n"


def test_render_with_arithmetic_and_context(tmp_path: Path):
    path = write_template(
        tmp_path, "maxconn {{ mul(hostnames | length, 100) }} {{ divf(1, 4) }}\n"
    )

    content = TemplateRenderer(path, DummyResolver()).render(hostnames=["a", "b"])

    assert content == b"maxconn 200 0.25\n"


def test_template_edits_are_picked_up(tmp_path: Path):
    path = write_template(tmp_path, "first\n")
    renderer = TemplateRenderer(path, DummyResolver())
    assert renderer.render() == b"first\n"

    path.write_text("second, and longer\n")

    assert renderer.render() == b"second, and longer\n"


@pytest.mark.parametrize(
    "text",
    [
        "{{ undefined_name }}",
        "{% for x in %}",
        "{{ div(1, 0) }}",
    ],
)
def test_render_errors(tmp_path: Path, text: str):
    path = write_template(tmp_path, text)

    with pytest.raises(RenderError) as info:
        TemplateRenderer(path, DummyResolver()).render()

    assert info.value.template == str(path)


def test_malformed_hostname_in_template_renders_empty_list(tmp_path: Path):
    path = write_template(tmp_path, "n={{ lookupHost('bad..host') | length }}\n")

    content = TemplateRenderer(path, Resolver()).render()

    assert content == b"n=0\n"
