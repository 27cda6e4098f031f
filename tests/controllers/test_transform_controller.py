# tests/controllers/test_transform_controller.py
import pytest

from html_loader.controllers.transform_controller import TransformController, transform
from html_loader.model import TransformOptions
from html_loader.sourcemap.generator import decode_mappings

REGISTER = "polymer-webpack-loader/register-html-template"


def test_end_to_end_example():
    """Test het volledige voorbeeld: import, registratie en inline script met source map."""
    content = '<link rel="import" href="a.html"><dom-module id="x"><script>var a=1;</script></dom-module>'
    result = transform(content, "/p/f.html")

    assert result.code == (
        "\nimport '/p/a.html';\n"
        f"\nconst RegisterHtmlTemplate = require('{REGISTER}');"
        "\nRegisterHtmlTemplate.register('<dom-module id=\"x\"></dom-module>');\n"
        "\nvar a=1;\n"
    )

    named = [m for m in decode_mappings(result.source_map) if m.name]
    assert len(named) == 1
    m = named[0]
    assert m.name == "a"
    assert m.source == "/p/f.html"
    assert (m.original_line, m.original_column) == (1, content.index("a=1"))
    # import (2) + registration (3) + token line 1
    assert m.generated_line == 6
    assert result.code.split("\n")[m.generated_line] == "var a=1;"
    assert m.generated_column == 4
    assert result.source_map.sources_content == [content]


def test_line_count_conservation_across_passes():
    """Test dat de gegenereerde regels optellen: 2 per import, 3 per registratie."""
    content = (
        '<link rel="import" href="x.html">\n'
        '<dom-module id="m">\n'
        '  <template><div>hi</div></template>\n'
        '  <script>\n'
        '    var first = 1;\n'
        '  </script>\n'
        '</dom-module>\n'
        '<script src="local.js"></script>\n'
        '<script>\n'
        '  var second = 2;\n'
        '</script>\n'
    )
    result = transform(content, "/proj/comp.html")
    by_name = {m.name: m for m in decode_mappings(result.source_map) if m.name}
    lines = result.code.split("\n")
    original = content.split("\n")

    # link (2) + registration (3) + token line 2
    assert by_name["first"].generated_line == 2 + 3 + 2
    # + first script (2 + span 2) + local import (2) + token line 2
    assert by_name["second"].generated_line == 2 + 3 + (2 + 2) + 2 + 2

    for m in by_name.values():
        assert lines[m.generated_line][m.generated_column:].startswith(m.name)
        assert original[m.original_line - 1][m.original_column:].startswith(m.name)


def test_empty_registration_costs_no_lines():
    content = '<link href="a.html">\n<script>go();</script>'
    result = transform(content, "/p/f.html")
    (go,) = [m for m in decode_mappings(result.source_map) if m.name]

    assert "RegisterHtmlTemplate" not in result.code
    assert go.generated_line == 2 + 1
    assert result.code.split("\n")[go.generated_line] == "go();"


def test_external_script_round_trip():
    """Test dat een extern script letterlijk in de template blijft en geen import oplevert."""
    content = '<dom-module id="x"><script src="https://cdn.example.com/a.js"></script></dom-module>'
    result = transform(content, "/p/f.html")

    assert '<script src="https://cdn.example.com/a.js"></script>' in result.code
    assert "import" not in result.code
    assert result.source_map is None


def test_document_without_component_and_no_scripts():
    result = transform("<p>Hello</p>", "/p/page.html")
    assert result.code == (
        f"\nconst RegisterHtmlTemplate = require('{REGISTER}');"
        "\nRegisterHtmlTemplate.toBody('<p>Hello</p>');\n"
    )
    assert result.source_map is None


def test_whitespace_document_yields_empty_output():
    result = transform("  \n\n ", "/p/empty.html")
    assert result.code == ""
    assert result.source_map is None


def test_options_from_host_dict():
    content = (
        '<link rel="import" href="../bower_components/polymer/polymer.html">'
        '<link rel="import" href="shared/styles.html">'
        '<link rel="import" href="skip.html">'
    )
    options = {
        "ignoreLinks": ["skip.html"],
        "ignoreLinksFromPartialMatches": ["bower_components/polymer"],
        "ignorePathReWrite": ["shared/"],
        "unknownKey": True,
    }
    result = transform(content, "/p/f.html", options)
    assert result.code == "\nimport 'shared/styles.html';\n"


def test_controller_is_reusable_across_files():
    controller = TransformController(TransformOptions())
    first = controller.process("<script>a();</script>", "/p/one.html")
    second = controller.process("<script>b();</script>", "/p/two.html")

    assert first.source_map.sources == ["/p/one.html"]
    assert second.source_map.sources == ["/p/two.html"]
    assert second.source_map.names == ["b"]


def test_tokenizer_failure_propagates():
    with pytest.raises(ValueError):
        transform('<dom-module id="x"><script>let s = "open</script></dom-module>', "/p/bad.html")


def test_empty_rewrite_marker_keeps_every_href_verbatim():
    result = transform('<link rel="import" href="a.html">', "/p/f.html", {"ignorePathReWrite": [""]})
    assert result.code == "\nimport 'a.html';\n"
