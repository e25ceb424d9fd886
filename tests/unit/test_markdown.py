"""Unit tests for HTML to markdown conversion helpers."""

from infrastructure.parsers.markdown import (
    SCAFFOLD_MARKER,
    clean_converted_markdown,
    collapse_blank_lines,
    html_to_markdown,
    strip_scaffold,
)


def test_var_becomes_inline_math():
    assert html_to_markdown("<p>Given <var>N</var> items.</p>") == "Given $N$ items."


def test_codeforces_triple_dollar_math():
    assert html_to_markdown("<p>Let $$$a_i$$$ be positive.</p>") == "Let $a_i$ be positive."


def test_codeforces_display_math_keeps_surrounding_text():
    html = "<p>Sum $$$$$$\\sum_{i=1}^n a_i$$$$$$ done, inline $$$n$$$.</p>"

    assert html_to_markdown(html) == "Sum $$\\sum_{i=1}^n a_i$$ done, inline $n$."


def test_headings_are_atx():
    result = html_to_markdown("<h3>Constraints</h3><p>All values are integers.</p>")
    assert result.startswith("### Constraints")


def test_relative_images_are_made_absolute():
    result = html_to_markdown('<p><img src="/img/a.png" alt=""></p>', "https://atcoder.jp")
    assert "https://atcoder.jp/img/a.png" in result


def test_absolute_images_are_kept():
    result = html_to_markdown('<p><img src="https://cdn.example.com/x.png"></p>', "https://atcoder.jp")
    assert "https://cdn.example.com/x.png" in result
    assert "atcoder.jp" not in result


def test_collapse_blank_lines():
    assert collapse_blank_lines("a  \n\n\n\nb\n") == "a\n\nb"


def test_strip_scaffold_cuts_template_tail():
    code = (
        "public class Main {\n"
        "    static void solve() {}\n"
        "\n"
        f"    {SCAFFOLD_MARKER}\n"
        "    static class FastScanner {}\n"
        "}\n"
    )

    assert strip_scaffold(code) == "public class Main {\n    static void solve() {}\n}"


def test_strip_scaffold_without_marker_is_noop():
    code = "print(input())\n"
    assert strip_scaffold(code) == code


def test_clean_converted_markdown_merges_heading_triplets():
    text = "##\n<h3>Problem Statement</h3>\n##\n\nFind the sum."

    result = clean_converted_markdown(text)

    assert result.startswith("## Problem Statement")
    assert "<h3>" not in result
    assert result.endswith("Find the sum.")


def test_clean_converted_markdown_drops_bare_headings_and_wrappers():
    text = 'Intro\n###\n<div class="io-style">\nInput is given.\n</div>\nDone'

    result = clean_converted_markdown(text)

    assert "###" not in result
    assert "div" not in result
    assert "Input is given." in result
    assert result.endswith("Done")


def test_clean_converted_markdown_collapses_repeated_rules():
    result = clean_converted_markdown("A\n\n---\n\n---\n\nB")
    assert result.count("---") == 1
