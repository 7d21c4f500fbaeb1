"""Submission mapper tests."""

from formengine.kernel.submission import map_submission


class TestMapSubmission:
    def test_pairs_to_record(self):
        record = map_submission([("Email", "a@b.com"), ("Region", "North")])

        assert record == {"Email": "a@b.com", "Region": "North"}

    def test_mapping_input(self):
        assert map_submission({"Email": "a@b.com"}) == {"Email": "a@b.com"}

    def test_keeps_submission_order(self):
        record = map_submission([("b", "1"), ("a", "2")])

        assert list(record) == ["b", "a"]

    def test_last_writer_wins(self):
        record = map_submission([("Name", "first"), ("Name", "second")])

        assert record == {"Name": "second"}

    def test_multi_collects_repeats(self):
        record = map_submission([("Tag", "a"), ("Other", "x"), ("Tag", "b"), ("Tag", "c")], multi=True)

        assert record == {"Tag": ["a", "b", "c"], "Other": "x"}

    def test_empty_submission(self):
        assert map_submission([]) == {}

    def test_empty_name_kept(self):
        """Fields with no name still post under the empty key."""
        assert map_submission([("", "value")]) == {"": "value"}
