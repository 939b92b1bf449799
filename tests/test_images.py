"""Tests for image metadata extraction."""

from markdown_it import MarkdownIt
from markdown_it.token import Token

from mdgallery.images import (
    ImageRecord,
    get_attributes_from_hash,
    image_record_from_token,
    image_records,
    images_attr_string,
    split_src,
)
from mdgallery.serialize import APOSTROPHE_SUBSTITUTE


def parse_images(text):
    """Image tokens of the first paragraph in text."""
    tokens = MarkdownIt().parse(text)
    inline = next(t for t in tokens if t.type == "inline")
    return [child for child in inline.children if child.type == "image"]


def image_token(src, alt="", title=None):
    token = Token("image", "img", 0, content=alt)
    token.attrSet("src", src)
    if title is not None:
        token.attrSet("title", title)
    return token


class TestGetAttributesFromHash:
    """Tests for get_attributes_from_hash function."""

    def test_parses_pairs(self):
        assert get_attributes_from_hash("caption=x&frame=2") == {
            "caption": "x",
            "frame": "2",
        }

    def test_none_and_empty(self):
        assert get_attributes_from_hash(None) == {}
        assert get_attributes_from_hash("") == {}

    def test_drops_parts_without_value(self):
        assert get_attributes_from_hash("flag&frame=2") == {"frame": "2"}

    def test_drops_empty_keys(self):
        assert get_attributes_from_hash("=x") == {}

    def test_extra_equals_truncate_value(self):
        """'=' inside a value is not supported; the value ends at the next '='."""
        assert get_attributes_from_hash("a=1=2") == {"a": "1"}

    def test_empty_value_kept(self):
        assert get_attributes_from_hash("a=") == {"a": ""}


class TestSplitSrc:
    """Tests for split_src function."""

    def test_with_fragment(self):
        assert split_src("a.jpg#caption=x&frame=2") == ("a.jpg", "caption=x&frame=2")

    def test_without_fragment(self):
        assert split_src("a.jpg") == ("a.jpg", None)

    def test_drops_text_after_second_hash(self):
        assert split_src("a.jpg#x=1#y=2") == ("a.jpg", "x=1")

    def test_none(self):
        assert split_src(None) == ("", None)


class TestImageRecords:
    """Tests for building image records from tokens."""

    def test_record_from_parsed_image(self):
        [token] = parse_images('![Alt text](a.jpg#caption=x&frame=2 "The title")')

        record = image_record_from_token(token, 0)

        assert record == ImageRecord(
            id=0,
            src="a.jpg",
            alt="Alt text",
            caption="The title",
            extra_attributes={"caption": "x", "frame": "2"},
        )

    def test_missing_title_gives_empty_caption(self):
        record = image_record_from_token(image_token("a.jpg", alt="A"), 3)
        assert record.caption == ""
        assert record.id == 3

    def test_apostrophes_substituted(self):
        record = image_record_from_token(
            image_token("a.jpg", alt="Tom's", title="Ann's"), 0
        )
        assert record.alt == f"Tom{APOSTROPHE_SUBSTITUTE}s"
        assert record.caption == f"Ann{APOSTROPHE_SUBSTITUTE}s"

    def test_ids_are_positions(self):
        tokens = parse_images("![A](a.jpg) ![B](b.jpg) ![C](c.jpg)")
        assert [record.id for record in image_records(tokens)] == [0, 1, 2]

    def test_to_dict_uses_consumer_keys(self):
        record = ImageRecord(id=1, src="a.jpg", extra_attributes={"k": "v"})
        assert record.to_dict() == {
            "id": 1,
            "src": "a.jpg",
            "alt": "",
            "caption": "",
            "extraAttributes": {"k": "v"},
        }


class TestImagesAttrString:
    """Tests for images_attr_string function."""

    def test_serializes_and_rewrites(self):
        tokens = parse_images(
            "![A](../../images/src/a.jpg#frame=2) ![B](/images/src/b%20c.jpg)"
        )

        result = images_attr_string(tokens, "/images/src", "/images")

        assert result == (
            "[{id:0,src:'/images/a.jpg',alt:'A',caption:'',extraAttributes:{frame:'2'}},"
            "{id:1,src:'/images/b%2520c.jpg',alt:'B',caption:'',extraAttributes:{}}]"
        )

    def test_no_images(self):
        assert images_attr_string([], "/images/src", "/images") == "[]"
