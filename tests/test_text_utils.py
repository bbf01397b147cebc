from schoolhub.utils import sanitize_html


def test_sanitize_html_removes_script_blocks():
    assert sanitize_html("Hello<script>alert('x')</script> world") == "Hello world"


def test_sanitize_html_removes_inline_handlers():
    cleaned = sanitize_html("<img src=\"a.png\" onerror=\"boom()\"><b onclick='x()'>hi</b>")

    assert "onerror" not in cleaned
    assert "onclick" not in cleaned
    assert "hi" in cleaned


def test_sanitize_html_keeps_plain_text():
    assert sanitize_html("Meeting at 10 > 9") == "Meeting at 10 > 9"
