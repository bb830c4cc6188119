"""
Tests: Clause splitting (list items and modal sentences).

Run with:
    pytest rfp_requirements/tests/test_clauses.py -v
"""

from rfp_requirements.extraction.clauses import split_clauses, split_items, split_sentences
from rfp_requirements.models.enums import ExtractionStrategy
from rfp_requirements.models.schemas import Section


class TestSplitItems:
    def test_bullets_with_lead_text(self):
        text = "Applicants must provide:\n- a budget\n- a timeline"
        assert split_items(text) == ["Applicants must provide:", "a budget", "a timeline"]

    def test_numbered_and_lettered_markers(self):
        assert split_items("1. first\n2. second") == ["first", "second"]
        assert split_items("a) alpha\nb) beta") == ["alpha", "beta"]
        assert split_items("• one\n* two") == ["one", "two"]

    def test_continuation_lines_stay_with_their_item(self):
        text = "- first line\ncontinued here\n- second"
        assert split_items(text) == ["first line\ncontinued here", "second"]

    def test_no_markers_means_no_items(self):
        assert split_items("Just a paragraph of text.") == []
        assert split_items("") == []

    def test_decimal_number_is_not_a_marker(self):
        assert split_items("1.5 million people live here.") == []


class TestSplitSentences:
    def test_keeps_only_modal_sentences(self):
        text = "Applicants must register. This is background. Reports will be due quarterly!"
        assert split_sentences(text) == [
            "Applicants must register.",
            "Reports will be due quarterly!",
        ]

    def test_whitespace_is_flattened(self):
        assert split_sentences("Vendors\nshall   comply.") == ["Vendors shall comply."]

    def test_nothing_modal(self):
        assert split_sentences("We are excited. Thank you.") == []
        assert split_sentences("   ") == []


class TestSplitClauses:
    def test_indexes_and_section_title(self):
        section = Section(title="Submission", content=["- one", "- two"])
        clauses = split_clauses(section)
        assert [c.index for c in clauses] == [0, 1]
        assert all(c.section_title == "Submission" for c in clauses)
        assert [c.raw_text for c in clauses] == ["one", "two"]

    def test_sentence_strategy_by_name(self):
        section = Section(title="Eligibility", content=["Applicants must be nonprofits. Hello."])
        clauses = split_clauses(section, "sentences")
        assert [c.raw_text for c in clauses] == ["Applicants must be nonprofits."]
        assert split_clauses(section, ExtractionStrategy.ITEMS) == []
