"""Tests for document assembly."""
import io

from txt2html.application.assembler import DocumentAssembler, convert, render_document
from txt2html.application.filters import linkify, url_to_image
from txt2html.domain.models import HookRegistry, Stage


def test_document_without_hooks():
    html = render_document("Hello & <world>", title="demo")
    assert html == "<!DOCTYPE html>\n<title>demo</title>\n<pre>Hello &amp; &lt;world&gt;</pre>\n"


def test_trailing_newlines_do_not_reach_pre_close():
    html = render_document("line one\nline two\n\n", title="t")
    assert html.endswith("<pre>line one\nline two</pre>\n")


def test_title_is_encoded():
    html = render_document("", title='Q&A "notes"')
    assert '<title>Q&amp;A &quot;notes&quot;</title>\n' in html
    assert html.endswith("<pre></pre>\n")


def test_stage_order_and_newlines():
    registry = HookRegistry(
        {
            Stage.TITLE: [lambda text: text + " | site"],
            Stage.AFTER_TITLE: [lambda text: '<meta charset="utf-8">'],
            Stage.BEFORE_PRE: [lambda text: "<h1>Heading</h1>"],
            Stage.PRE: [str.upper],
            Stage.AFTER_PRE: [lambda text: "<footer>end</footer>"],
        }
    )
    html = render_document("body", title="page", hooks=registry)
    assert html == (
        "<!DOCTYPE html>\n"
        "<title>page | site</title>\n"
        '<meta charset="utf-8">\n'
        "<h1>Heading</h1>\n"
        "<pre>BODY</pre>\n"
        "<footer>end</footer>"
    )


def test_empty_optional_stages_emit_nothing():
    registry = HookRegistry({Stage.AFTER_TITLE: [lambda text: ""], Stage.AFTER_PRE: [lambda text: ""]})
    assert render_document("b", title="t", hooks=registry) == render_document("b", title="t")


def test_filters_as_pre_hooks_see_encoded_body():
    registry = HookRegistry({Stage.PRE: [linkify, url_to_image]})
    body = "Links:\n[1] http://example.com/?a=1&b=2\n./img/logo.png\n<tag>"
    html = render_document(body, title="t", hooks=registry)
    assert (
        '[1] <a href="http://example.com/?a=1&amp;b=2">http://example.com/?a=1&amp;b=2</a>' in html
    )
    assert '<img src="./img/logo.png">' in html
    assert "&lt;tag&gt;</pre>" in html


def test_convert_reads_stream():
    out = io.StringIO()
    convert(io.StringIO("a < b\n"), out, title="stream")
    assert out.getvalue() == "<!DOCTYPE html>\n<title>stream</title>\n<pre>a &lt; b</pre>\n"


def test_assembler_reusable_across_documents():
    assembler = DocumentAssembler(HookRegistry({Stage.PRE: [str.upper]}))
    assert "<pre>ONE</pre>" in assembler.render("one")
    assert "<pre>TWO</pre>" in assembler.render("two")
