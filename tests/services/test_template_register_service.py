# tests/services/test_template_register_service.py
from html_loader.dom.builder import parse_document
from html_loader.model import TransformOptions
from html_loader.services.minify_service import MinifyService
from html_loader.services.template_register_service import TemplateRegisterService

REQUIRE = "\nconst RegisterHtmlTemplate = require('polymer-webpack-loader/register-html-template');"


def run_dom_module(content: str, **options):
    service = TemplateRegisterService(TransformOptions.from_host(options))
    return service.dom_module(parse_document(content))


def test_component_markup_is_registered():
    """Test dat een dom-module als template wordt geregistreerd zonder inline scripts."""
    fragment = run_dom_module('<dom-module id="x"><script>var a=1;</script></dom-module>')
    assert fragment.text == REQUIRE + "\nRegisterHtmlTemplate.register('<dom-module id=\"x\"></dom-module>');\n"
    assert fragment.line_count == 3


def test_document_without_component_goes_to_body():
    fragment = run_dom_module('<div class="a">Hi</div>\n')
    assert fragment.text == REQUIRE + "\nRegisterHtmlTemplate.toBody('<div class=\"a\">Hi</div>');\n"
    assert fragment.line_count == 3


def test_empty_markup_emits_nothing():
    for content in ("", "   \n\t  ", "<!-- only a comment -->", "<script>a();</script>", '<link href="a.html">'):
        fragment = run_dom_module(content)
        assert fragment.text == ""
        assert fragment.line_count == 0


def test_external_scripts_stay_in_template():
    """Test dat een script met absolute src letterlijk in de template blijft."""
    fragment = run_dom_module(
        '<dom-module id="x">'
        '<script src="https://cdn.example.com/a.js"></script>'
        '<script src="local.js"></script>'
        '<link rel="import" href="b.html">'
        '</dom-module>'
    )
    assert '<script src="https://cdn.example.com/a.js"></script>' in fragment.text
    assert "local.js" not in fragment.text
    assert "b.html" not in fragment.text


def test_comments_are_stripped_and_whitespace_collapsed():
    fragment = run_dom_module('<dom-module id="x">\n  <!-- note -->\n  <template>\n    <p>a   b</p>\n  </template>\n</dom-module>')
    assert "note" not in fragment.text
    assert "<p>a b</p>" in fragment.text
    assert len(fragment.text.split("\n")) == 4


def test_styles_are_minified():
    fragment = run_dom_module(
        '<dom-module id="s"><template><style>\n  .a {\n    color: red;\n  }\n</style></template></dom-module>'
    )
    assert ".a{color:red" in fragment.text
    assert "  .a" not in fragment.text


def test_single_quotes_are_escaped():
    fragment = run_dom_module("<dom-module id=\"q\"><template><p>don't</p></template></dom-module>")
    assert "<p>don\\'t</p>" in fragment.text
    assert fragment.line_count == 3


def test_registration_stays_on_one_line():
    fragment = run_dom_module('<dom-module id="p"><template><pre>a\nb\\c</pre></template></dom-module>')
    lines = fragment.text.split("\n")
    assert len(lines) == 4
    assert "a\\nb\\\\c" in lines[2]


def test_only_first_component_is_the_body_root():
    """Test dat de eerste dom-module bepaalt welke ouder geserialiseerd wordt."""
    fragment = run_dom_module(
        '<div id="outer"><dom-module id="one"></dom-module></div><dom-module id="two"></dom-module>'
    )
    assert "register('<dom-module id=\"one\"></dom-module>')" in fragment.text
    assert "two" not in fragment.text


def test_custom_register_module():
    fragment = run_dom_module('<dom-module id="x"></dom-module>', registerTemplateModule="my-app/register")
    assert "require('my-app/register');" in fragment.text


def test_minify_html_blank():
    assert MinifyService.minify_html("") == ""
    assert MinifyService.minify_html(" \n ") == ""
