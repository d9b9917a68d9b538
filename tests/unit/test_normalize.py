"""Unit tests for response normalization."""

import pytest

from email_productivity_agent.llm.normalize import (
    InvalidItems,
    ManyItems,
    SingleItem,
    action_items_from_response,
    normalize_category,
    parse_action_items,
)
from email_productivity_agent.models import EmailCategory


class TestNormalizeCategory:
    """Test suite for categorization normalization."""

    @pytest.mark.parametrize(
        "raw",
        [
            "Spam",
            "This looks like a phishing attempt, but it is also important",
            "junk mail / newsletter",
            "SCAM - urgent to-do",
        ],
    )
    def test_spam_keywords_win(self, raw: str) -> None:
        assert normalize_category(raw) is EmailCategory.SPAM

    def test_newsletter_beats_todo(self) -> None:
        assert normalize_category("A newsletter with a task inside") is EmailCategory.NEWSLETTER

    @pytest.mark.parametrize("raw", ["To-Do", "todo", "Action item for you", "needs follow up"])
    def test_todo_keywords(self, raw: str) -> None:
        assert normalize_category(raw) is EmailCategory.TODO

    def test_important_keywords(self) -> None:
        assert normalize_category("  HIGH PRIORITY \n") is EmailCategory.IMPORTANT

    @pytest.mark.parametrize("raw", ["Personal", "", "I am not sure"])
    def test_unrecognized_falls_back_to_important(self, raw: str) -> None:
        assert normalize_category(raw) is EmailCategory.IMPORTANT


class TestActionItems:
    """Test suite for action item parsing."""

    def test_single_object(self) -> None:
        items = action_items_from_response('{"task":"Submit report","deadline":"Friday"}')

        assert len(items) == 1
        assert items[0].task == "Submit report"
        assert items[0].deadline == "Friday"

    def test_empty_array(self) -> None:
        assert action_items_from_response("[]") == []

    def test_invalid_data_is_swallowed(self) -> None:
        assert action_items_from_response("not valid data") == []

    def test_object_without_task_is_invalid(self) -> None:
        result = parse_action_items('{"deadline": "Monday"}')

        assert isinstance(result, InvalidItems)
        assert action_items_from_response('{"deadline": "Monday"}') == []

    def test_array_keeps_order_and_drops_bad_entries(self) -> None:
        raw = (
            '[{"task": "Review certificate", "deadline": ""},'
            ' "stray text",'
            ' {"deadline": "soon"},'
            ' {"task": "Update DNS records", "deadline": null}]'
        )

        result = parse_action_items(raw)

        assert isinstance(result, ManyItems)
        assert [item.task for item in result.items] == ["Review certificate", "Update DNS records"]
        assert result.items[1].deadline == ""

    def test_code_fenced_json(self) -> None:
        raw = '```json\n{"task": "Renew certificate", "deadline": "December 20th"}\n```'

        result = parse_action_items(raw)

        assert isinstance(result, SingleItem)
        assert result.item.deadline == "December 20th"

    def test_scalar_json_is_invalid(self) -> None:
        assert isinstance(parse_action_items("42"), InvalidItems)

    def test_deeply_nested_json_is_invalid(self) -> None:
        raw = "[" * 100_000

        assert isinstance(parse_action_items(raw), InvalidItems)
        assert action_items_from_response(raw) == []
