"""Tests for answer rendering and the PDF export."""
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from equiphelper.ui.export import (
    AI_COLOR,
    BODY_FONT_SIZE,
    FONT,
    FIRST_LINE_Y,
    LINE_HEIGHT,
    NEW_PAGE_Y,
    PAGE_BREAK_Y,
    USER_COLOR,
    WRAP_WIDTH,
    export_to_pdf,
    layout_pages,
    wrap_text,
)
from equiphelper.ui.messages import Message, greeting
from equiphelper.ui.rendering import render_message_text


class TestRenderMessageText:
    def test_plain_text_is_one_paragraph(self):
        segments = render_message_text("  Inspect the shell for cracks.  ")

        assert [(s.kind, s.value) for s in segments] == [("paragraph", "Inspect the shell for cracks.")]

    def test_image_between_paragraphs(self):
        segments = render_message_text("A /PPE Images/helmet.png B")

        assert [(s.kind, s.value) for s in segments] == [
            ("paragraph", "A"),
            ("image", "/PPE Images/helmet.png"),
            ("paragraph", "B"),
        ]

    def test_many_images_keep_order(self):
        text = "Relevant image: /PPE Images/boots.png/PPE Images/Hood front.png done"

        segments = render_message_text(text)

        assert [(s.kind, s.value) for s in segments] == [
            ("paragraph", "Relevant image:"),
            ("image", "/PPE Images/boots.png"),
            ("image", "/PPE Images/Hood front.png"),
            ("paragraph", "done"),
        ]

    def test_empty_text(self):
        assert render_message_text("") == []

    def test_other_extensions_stay_text(self):
        segments = render_message_text("see /PPE Images/helmet.jpg")

        assert [s.kind for s in segments] == ["paragraph"]


class TestLayoutPages:
    def test_colors_and_positions(self):
        pages = layout_pages([Message(text="hi", type="user"), Message(text="hello", type="ai")])

        assert len(pages) == 1
        assert [(line.text, line.color, line.y) for line in pages[0]] == [
            ("User: hi", USER_COLOR, FIRST_LINE_Y),
            ("equipHelper: hello", AI_COLOR, FIRST_LINE_Y + LINE_HEIGHT),
        ]

    def test_long_text_wraps(self):
        lines = wrap_text("word " * 200)

        assert len(lines) > 1

    def test_paginates_after_page_height(self):
        messages = [Message(text=f"question {i}", type="user") for i in range(30)]

        pages = layout_pages(messages)

        assert len(pages) == 2
        # y reaches 290 after the 27th message
        assert len(pages[0]) == 27
        assert pages[1][0].y == NEW_PAGE_Y

    def test_greeting_emoji_are_dropped(self):
        [line, *_] = layout_pages([greeting()])[0]

        assert line.text.startswith("equipHelper:")
        assert "Hey there!" in line.text
        assert "\U0001F692" not in line.text


def test_export_writes_pdf(tmp_path):
    target = tmp_path / "equipHelper_Chat_History.pdf"

    result = export_to_pdf([greeting(), Message(text="How do I store my hood?", type="user")], target)

    assert result == target
    assert target.read_bytes().startswith(b"%PDF")


class TestLongContent:
    def test_single_message_longer_than_a_page_continues(self):
        pages = layout_pages([Message(text="word " * 1500, type="ai")])

        ys = [line.y for page in pages for line in page]
        assert len(pages) > 2
        assert max(ys) <= PAGE_BREAK_Y
        assert all(page[0].y == NEW_PAGE_Y for page in pages[1:])
        assert sum(len(page) for page in pages) == len(wrap_text("equipHelper: " + "word " * 1500))

    def test_unbroken_token_is_cut_to_width(self):
        lines = wrap_text("x" * 400)

        assert len(lines) > 1
        assert "".join(lines) == "x" * 400
        assert all(stringWidth(line, FONT, BODY_FONT_SIZE) <= WRAP_WIDTH * mm for line in lines)

    def test_long_url_after_words(self):
        url = "https://example.test/" + "a" * 300

        lines = wrap_text(f"See {url} today")

        assert lines[0] == "See"
        assert "".join(lines[1:-1]) == url
        assert lines[-1] == "today"
