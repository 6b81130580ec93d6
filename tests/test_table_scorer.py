"""Unit tests for table scoring and selection."""

from syllabus_extractor.models import ExtractedTable
from syllabus_extractor.table_scorer import TableScorer, select_table


def make_table(*headers):
    return ExtractedTable(headers=list(headers), rows=[["x"] * len(headers)])


def score(table):
    return TableScorer().score(table)


def test_score_counts_vocabulary_hits():
    """Each vocabulary word found in the headers adds one point."""
    assert score(make_table("Date", "Title")) == 2
    assert score(make_table("Due Date", "Assignment", "Points")) == 4
    assert score(make_table("Week", "Topic", "Reading")) == 0


def test_score_is_case_insensitive_substring():
    """Vocabulary words match inside longer header words."""
    assert score(make_table("HOMEWORK TASKS")) == 2
    assert score(make_table("Deadlines")) == 1


def test_repeated_word_counts_once():
    """A word appearing in several headers still scores one point."""
    assert score(make_table("Start Date", "End Date")) == 1


def test_score_is_stored_on_table():
    """Scoring records the score on the table."""
    table = make_table("Date", "Event")
    TableScorer().score(table)
    assert table.score == 2


def test_select_highest_scoring():
    """The best table wins."""
    low = make_table("Date", "Topic")
    high = make_table("Due Date", "Assignment", "Points")
    assert select_table([low, high]) is high


def test_select_tie_goes_to_first():
    """Ties are broken by extraction order."""
    first = make_table("Date", "Title")
    second = make_table("Due", "Task")
    assert select_table([first, second]) is first


def test_select_below_threshold():
    """A best score under the minimum means no suitable table."""
    assert select_table([make_table("Date", "Topic")]) is None
    assert select_table([]) is None


def test_select_custom_threshold():
    """The threshold is configurable."""
    table = make_table("Date", "Topic")
    assert select_table([table], min_score=1) is table
    assert select_table([make_table("Date", "Title")], min_score=3) is None
