"""Tests for image path rewriting."""

import pytest

from mdgallery.paths import SRC_PREFIX, encode_spaces, replace_image_paths


def rewrite(attr_string, old="/images/src", new="/images"):
    return replace_image_paths(SRC_PREFIX, attr_string, old, new)


class TestReplaceImagePaths:
    """Tests for replace_image_paths function."""

    @pytest.mark.parametrize(
        "path",
        [
            "../../images/src/a.jpg",
            "../images/src/a.jpg",
            "images/src/a.jpg",
            "/images/src/a.jpg",
            "//images/src/a.jpg",
        ],
    )
    def test_parent_and_root_relative_paths(self, path):
        assert rewrite(f"[{{src:'{path}'}}]") == "[{src:'/images/a.jpg'}]"

    def test_rewrites_every_occurrence(self):
        attr_string = "[{src:'../images/src/a.jpg'},{src:'/images/src/b.jpg'}]"

        result = rewrite(attr_string)

        assert result == "[{src:'/images/a.jpg'},{src:'/images/b.jpg'}]"

    def test_old_path_without_leading_slash(self):
        assert rewrite("[{src:'/images/src/a.jpg'}]", old="images/src") == (
            "[{src:'/images/a.jpg'}]"
        )

    def test_unrelated_paths_unchanged(self):
        attr_string = "[{src:'/other/a.jpg'},{src:'https://example.com/a.jpg'}]"
        assert rewrite(attr_string) == attr_string

    def test_only_paths_after_prefix(self):
        attr_string = "[{src:'a.jpg',alt:'/images/src/a.jpg'}]"
        assert rewrite(attr_string) == attr_string

    def test_empty_old_path_disables_rewriting(self):
        attr_string = "[{src:'/images/src/a%20b.jpg'}]"
        assert rewrite(attr_string, old="") == attr_string

    def test_new_path_is_not_rewritten_again(self):
        """A new path that starts with the old one is only applied once."""
        result = rewrite("[{src:'../img/a.jpg'}]", old="/img", new="/img/src")
        assert result == "[{src:'/img/src/a.jpg'}]"

    def test_encoded_spaces_are_double_encoded(self):
        result = rewrite("[{src:'/images/src/my%20photo.jpg'}]")
        assert result == "[{src:'/images/my%2520photo.jpg'}]"

    def test_regex_characters_in_old_path(self):
        result = rewrite("[{src:'/.vuepress/public/images/a.jpg'}]", old="/.vuepress/public/images")
        assert result == "[{src:'/images/a.jpg'}]"

    def test_dot_in_old_path_is_literal(self):
        attr_string = "[{src:'/xvuepress/public/images/a.jpg'}]"
        assert rewrite(attr_string, old="/.vuepress/public/images") == attr_string


class TestEncodeSpaces:
    """Tests for encode_spaces function."""

    def test_encodes_percent_of_space(self):
        assert encode_spaces("a%20b%20c") == "a%2520b%2520c"

    def test_other_escapes_unchanged(self):
        assert encode_spaces("a%2Fb") == "a%2Fb"
