from gitfolio.services.description_service import (
    collect_first_paragraph,
    extract_first_paragraph,
    strip_inline_markdown,
)


def test_skips_heading_and_badges_then_strips_markdown():
    markdown = "# Title\n\n![badge](x)\n\nThis is **bold** and a [link](url)."
    assert extract_first_paragraph(markdown) == "This is bold and a link."


def test_paragraph_joins_lines_until_blank_line():
    markdown = "[![build](x)](y)\nFirst line\nsecond line\n\nNext paragraph"
    assert collect_first_paragraph(markdown) == "First line second line"


def test_no_prose_gives_empty_excerpt():
    assert extract_first_paragraph("# Only a heading\n\n![img](x)\n") == ""
    assert extract_first_paragraph("") == ""


def test_strip_inline_markdown_handles_italic_and_code():
    assert strip_inline_markdown("use *fast* `mode` now") == "use fast mode now"


def test_long_paragraph_is_truncated_with_ellipsis():
    excerpt = extract_first_paragraph("a" * 400)
    assert excerpt == "a" * 250 + "..."


def test_exact_limit_is_not_truncated():
    assert extract_first_paragraph("b" * 250) == "b" * 250


def test_scan_stops_once_paragraph_is_long():
    lines = "\n".join(["word " * 40] * 5)
    paragraph = collect_first_paragraph(lines)
    # Each line is about 200 characters, so scanning stops after the second.
    assert paragraph.count("word") == 80


def test_clean_text_passes_through_unchanged():
    assert extract_first_paragraph("Plain clean sentence.") == "Plain clean sentence."


def test_extraction_is_idempotent():
    markdown = "# Title\n\n![badge](x)\n\nThis is **bold** and a [link](url)."
    once = extract_first_paragraph(markdown)
    assert extract_first_paragraph(once) == once
