"""Tests for filtering and sorting problem records."""

from __future__ import annotations

import pytest

from drillbook.dataset import FileBatch, FileLabels, merge_batches
from drillbook.query import (
    FilterCriteria,
    collation_key,
    filter_records,
    number_or_zero,
    parse_number,
    query,
    sort_records,
    summarize_view,
)


def _records() -> list[dict[str, str]]:
    return [
        {
            "Group": "Google",
            "Period": "2024",
            "Difficulty": "HARD",
            "Title": "Median of Two Sorted Arrays",
            "Frequency": "80.5",
            "Acceptance Rate": "0.42",
            "Link": "linkA",
            "Topics": "Array, Binary Search, Divide and Conquer",
        },
        {
            "Group": "Amazon",
            "Period": "Q1",
            "Difficulty": "EASY",
            "Title": "Two Sum",
            "Frequency": "99",
            "Acceptance_Rate": "0.55",
            "Link": "linkB",
            "Topics": "Array, Hash Table",
        },
        {
            "Group": "Google",
            "Period": "Q1",
            "Difficulty": "MEDIUM",
            "Title": "Number of Islands",
            "Frequency": "n/a",
            "Link": "linkC",
            "Topics": "Graph, DFS",
        },
    ]


def test_empty_criteria_returns_view_unchanged() -> None:
    records = _records()

    assert filter_records(records, FilterCriteria()) == records
    assert filter_records(records, None) == records


def test_exact_match_filters_are_conjunctive() -> None:
    records = _records()

    result = filter_records(records, FilterCriteria(group="Google", period="Q1"))

    assert [record["Link"] for record in result] == ["linkC"]
    assert filter_records(records, FilterCriteria(difficulty="easy")) == []


def test_topic_filter_uses_substring_containment() -> None:
    records = _records()

    assert [r["Link"] for r in filter_records(records, FilterCriteria(topic="Array"))] == [
        "linkA",
        "linkB",
    ]
    # Substring match also hits partial tag names.
    assert [r["Link"] for r in filter_records(records, FilterCriteria(topic="Sear"))] == ["linkA"]


def test_min_frequency_excludes_unparseable_values() -> None:
    result = filter_records(_records(), FilterCriteria(min_frequency=90))

    assert [record["Link"] for record in result] == ["linkB"]
    everything_numeric = filter_records(_records(), FilterCriteria(min_frequency=1))
    assert "linkC" not in {record["Link"] for record in everything_numeric}


def test_min_acceptance_scales_ratio_and_reads_both_spellings() -> None:
    result = filter_records(_records(), FilterCriteria(min_acceptance=50))

    assert [record["Link"] for record in result] == ["linkB"]
    result = filter_records(_records(), FilterCriteria(min_acceptance=40))
    assert [record["Link"] for record in result] == ["linkA", "linkB"]


def test_completion_filter_modes() -> None:
    records = [{"Link": "linkA"}, {"Link": "linkB"}]
    completed = {"linkA"}

    assert filter_records(records, FilterCriteria(completion="completed"), completed) == [
        {"Link": "linkA"}
    ]
    assert filter_records(records, FilterCriteria(completion="not-completed"), completed) == [
        {"Link": "linkB"}
    ]
    assert filter_records(records, FilterCriteria(completion="all"), completed) == records


def test_search_is_case_insensitive_over_title_group_and_topics() -> None:
    records = _records()

    def links(text: str) -> list[str]:
        return [r["Link"] for r in filter_records(records, FilterCriteria(search=text))]

    assert links("two sum") == ["linkB"]
    assert links("AMAZON") == ["linkB"]
    assert links("dfs") == ["linkC"]
    assert links("2024") == []


def test_sort_does_not_mutate_input() -> None:
    records = _records()
    snapshot = list(records)

    sort_records(records, "title", "desc")

    assert records == snapshot


def test_difficulty_sort_uses_severity_rank() -> None:
    records = [{"Difficulty": tier} for tier in ("HARD", "EASY", "MEDIUM", "UNKNOWN_TAG")]

    ascending = sort_records(records, "difficulty", "asc")
    descending = sort_records(records, "difficulty", "desc")

    assert [r["Difficulty"] for r in ascending] == ["UNKNOWN_TAG", "EASY", "MEDIUM", "HARD"]
    assert [r["Difficulty"] for r in descending] == ["HARD", "MEDIUM", "EASY", "UNKNOWN_TAG"]


def test_numeric_sorts_treat_unparseable_as_zero() -> None:
    records = _records()

    by_frequency = sort_records(records, "frequency", "asc")
    by_acceptance = sort_records(records, "acceptance", "desc")

    assert [r["Link"] for r in by_frequency] == ["linkC", "linkA", "linkB"]
    assert [r["Link"] for r in by_acceptance] == ["linkB", "linkA", "linkC"]


def test_sort_is_stable_in_both_directions() -> None:
    records = [
        {"Group": "B", "Title": "first"},
        {"Group": "A", "Title": "second"},
        {"Group": "B", "Title": "third"},
        {"Group": "A", "Title": "fourth"},
    ]

    ascending = sort_records(records, "group", "asc")
    descending = sort_records(records, "group", "desc")

    assert [r["Title"] for r in ascending] == ["second", "fourth", "first", "third"]
    assert [r["Title"] for r in descending] == ["first", "third", "second", "fourth"]


def test_unknown_column_sorts_raw_field_as_text() -> None:
    records = [{"Notes": "b"}, {}, {"Notes": "a"}]

    result = sort_records(records, "Notes", "asc")

    assert result == [{}, {"Notes": "a"}, {"Notes": "b"}]


def test_query_filters_then_sorts_dataset() -> None:
    dataset = merge_batches(
        [FileBatch(path="root/x/y.csv", labels=FileLabels("x", "y"), records=_records())]
    )

    result = query(dataset, FilterCriteria(group="Google"), column="frequency", direction="desc")

    assert [r["Link"] for r in result] == ["linkA", "linkC"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("45.2%", 45.2),
        (" 3", 3.0),
        (".5", 0.5),
        ("1e2x", 100.0),
        ("abc", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_number_reads_leading_number(raw: str | None, expected: float | None) -> None:
    assert parse_number(raw) == expected


def test_number_or_zero_fallback() -> None:
    assert number_or_zero("junk") == 0.0
    assert number_or_zero("7") == 7.0


def test_summarize_view_rounds_half_up() -> None:
    records = [{"Link": link} for link in "abcdefgh"]
    summary = summarize_view(records, {"a"})

    assert summary.total == 8
    assert summary.completed == 1
    assert summary.percent == 13
    assert summarize_view([], {"a"}).percent == 0
    assert "8 problems found, 1 completed (13%)" == summary.describe()


def test_text_sort_orders_like_a_dictionary() -> None:
    records = [{"Title": title} for title in ("banana", "Apple", "apple", "Banana")]

    ascending = sort_records(records, "title", "asc")
    descending = sort_records(records, "title", "desc")

    assert [r["Title"] for r in ascending] == ["apple", "Apple", "banana", "Banana"]
    assert [r["Title"] for r in descending] == ["Banana", "banana", "Apple", "apple"]


def test_text_sort_places_accented_letters_with_their_base() -> None:
    records = [{"Group": name} for name in ("Ezra", "éclair", "eclair", "Zeta")]

    result = sort_records(records, "group", "asc")

    assert [r["Group"] for r in result] == ["eclair", "éclair", "Ezra", "Zeta"]


def test_text_sort_tolerates_nul_characters() -> None:
    records = [{"Title": "C"}, {"Title": "A\x00b"}, {"Custom": "x\x00"}]

    by_title = sort_records(records, "title", "asc")
    by_custom = sort_records(records, "Custom", "desc")

    assert [r.get("Title") for r in by_title] == [None, "A\x00b", "C"]
    assert by_custom[0] == {"Custom": "x\x00"}


def test_collation_key_ignores_nul() -> None:
    assert collation_key("A\x00b") == collation_key("Ab")
