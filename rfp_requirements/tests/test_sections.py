"""
Tests: Section detection and heading recognition.

Run with:
    pytest rfp_requirements/tests/test_sections.py -v
"""

import pytest

from rfp_requirements.extraction import extract_requirements
from rfp_requirements.extraction.sections import (
    DEFAULT_SECTION_TITLE,
    detect_sections,
    heading_title,
)


class TestDetectSections:
    def test_all_caps_headings_open_sections(self):
        text = (
            "ELIGIBILITY\n"
            "Applicants must be a 501(c)(3) nonprofit.\n"
            "\n"
            "BUDGET\n"
            "Awards are not to exceed $50,000.\n"
        )
        sections = detect_sections(text)
        assert [s.title for s in sections] == ["ELIGIBILITY", "BUDGET"]
        assert sections[0].content == ["Applicants must be a 501(c)(3) nonprofit."]
        assert sections[1].content == ["Awards are not to exceed $50,000."]

    def test_leading_prose_goes_to_general(self):
        sections = detect_sections("Welcome to the program.\nELIGIBILITY\nNonprofits only.")
        assert sections[0].title == DEFAULT_SECTION_TITLE
        assert sections[0].content == ["Welcome to the program."]
        assert sections[1].title == "ELIGIBILITY"

    def test_heading_without_content_is_renamed(self):
        text = "REQUEST FOR PROPOSALS\n\nELIGIBILITY\nNonprofits only."
        sections = detect_sections(text)
        assert len(sections) == 1
        assert sections[0].title == "ELIGIBILITY"

    def test_blank_lines_dropped_and_lines_trimmed(self):
        sections = detect_sections("BUDGET\n\n   First line.   \n\n\nSecond line.\n")
        assert sections[0].content == ["First line.", "Second line."]

    def test_empty_and_whitespace_input(self):
        assert detect_sections("") == []
        assert detect_sections("   \n\t\n") == []

    def test_section_text_joins_lines(self):
        sections = detect_sections("TIMELINE\nKickoff in May.\nReports quarterly.")
        assert sections[0].text == "Kickoff in May.\nReports quarterly."


class TestHeadingTitle:
    def test_numbered_keyword_heading(self):
        assert heading_title("1. Eligibility:") == "Eligibility"

    def test_roman_numeral_keyword_heading(self):
        assert heading_title("IV. Evaluation Criteria") == "Evaluation Criteria"

    def test_mixed_case_keyword_heading(self):
        assert heading_title("Scope of Work") == "Scope of Work"

    def test_decimal_numbered_heading(self):
        assert heading_title("2.3 Applicant Registration") == "2.3 Applicant Registration"

    def test_sentence_starting_with_keyword_is_content(self):
        assert heading_title("Budget requests must not exceed $50,000.") is None

    def test_long_line_starting_with_keyword_is_content(self):
        line = "Funding may be used for staff salaries travel supplies equipment and other direct costs"
        assert heading_title(line) is None

    def test_plain_sentence_is_content(self):
        assert heading_title("Applicants must be nonprofits.") is None
        assert heading_title("") is None

    def test_number_title_phrase_heading(self):
        assert heading_title("4 Budget Narrative") == "4 Budget Narrative"

    @pytest.mark.parametrize("line", [
        "50 percent of funds go to direct services",
        "10 awards not to exceed $50,000 each",
        "1.5 million residents live in the county",
    ])
    def test_wrapped_line_starting_with_number_is_content(self, line):
        assert heading_title(line) is None


class TestWrappedLines:
    def test_number_led_continuation_stays_in_section(self):
        text = "BUDGET\nThe program will fund up to\n10 awards not to exceed $50,000 each\n"
        sections = detect_sections(text)
        assert len(sections) == 1
        assert sections[0].content == [
            "The program will fund up to",
            "10 awards not to exceed $50,000 each",
        ]

    def test_budget_cap_survives_wrapped_line(self):
        text = "BUDGET\nThe program will fund up to\n10 awards not to exceed $50,000 each\n"
        reqs = extract_requirements(text)
        assert len(reqs) == 1
        assert reqs[0].budget_caps.values == ["$50,000"]
