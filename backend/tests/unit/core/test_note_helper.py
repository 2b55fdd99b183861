"""Tests for tag and mention extraction."""

import pytest

from src.tsaap.core.note_helper import mentions_from_content, tags_from_content


class TestTagsFromContent:
    def test_finds_tags_lowercased(self):
        assert tags_from_content("hello #Math and #physics") == ["math", "physics"]

    def test_repeated_tag_appears_once(self):
        assert tags_from_content("#math #MATH #Math again #math") == ["math"]

    def test_keeps_first_appearance_order(self):
        assert tags_from_content("#zeta #alpha #zeta #beta") == ["zeta", "alpha", "beta"]

    def test_inner_hyphen_is_part_of_tag(self):
        assert tags_from_content("see #proof-by-induction.") == ["proof-by-induction"]

    def test_trailing_hyphen_is_not(self):
        assert tags_from_content("#math- stuff") == ["math"]

    def test_hash_inside_word_is_ignored(self):
        assert tags_from_content("C#sharp is not a tag, issue#12 neither") == []

    def test_tag_after_punctuation(self):
        assert tags_from_content("(#a),#b;#c") == ["a", "b", "c"]

    @pytest.mark.parametrize("content", [None, "", "   ", "no tags here", "# alone"])
    def test_nothing_to_find(self, content):
        assert tags_from_content(content) == []


class TestMentionsFromContent:
    def test_case_is_preserved(self):
        assert mentions_from_content("thanks @Alice and @bob") == ["Alice", "bob"]

    def test_email_is_not_a_mention(self):
        assert mentions_from_content("mail bob@example.com or @carol") == ["carol"]

    def test_dotted_usernames(self):
        assert mentions_from_content("ping @jean.dupont.") == ["jean.dupont"]

    def test_repeated_mention_appears_once(self):
        assert mentions_from_content("@alice @alice @alice") == ["alice"]

    def test_distinct_case_variants_are_distinct(self):
        assert mentions_from_content("@alice @Alice") == ["alice", "Alice"]

    def test_tags_and_mentions_do_not_mix(self):
        content = "hello #math @alice @bob"
        assert tags_from_content(content) == ["math"]
        assert mentions_from_content(content) == ["alice", "bob"]

    @pytest.mark.parametrize("content", [None, "", "@", "nobody"])
    def test_nothing_to_find(self, content):
        assert mentions_from_content(content) == []
