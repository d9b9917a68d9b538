"""Unit tests for EmailAgent."""

import httpx
import pytest

from email_productivity_agent.agent import EmailAgent
from email_productivity_agent.exceptions import LLMAPIError, LLMTimeoutError
from email_productivity_agent.llm.client import GeminiClient
from email_productivity_agent.models import EmailCategory


def _corrupt_gzip(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip")


def _gemini_over(settings, handler) -> GeminiClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeminiClient(settings=settings, http_client=http_client)


@pytest.fixture
def make_agent(mock_settings, email_repo, default_prompts, action_item_repo):
    def _make(client) -> EmailAgent:
        return EmailAgent(
            emails=email_repo,
            prompts=default_prompts,
            action_items=action_item_repo,
            gemini_client=client,
            settings=mock_settings,
        )

    return _make


class TestEmailAgent:
    """Test suite for EmailAgent."""

    @pytest.mark.asyncio
    async def test_categorize_email_normalizes_answer(
        self, make_agent, fake_gemini, email_repo, default_prompts, sample_email_data
    ) -> None:
        client = fake_gemini(["This is clearly a To-Do item."])
        agent = make_agent(client)
        email = email_repo.create(**sample_email_data)

        category = await agent.categorize_email(email, default_prompts.get_by_name("categorization"))

        assert category is EmailCategory.TODO
        user_message, system_message = client.calls[0]
        assert user_message.startswith("Email from: Sarah Johnson <sarah.johnson@techcorp.com>")
        assert user_message.endswith("Respond with ONLY the category name: Important, To-Do, Newsletter, or Spam.")
        assert system_message is None

    @pytest.mark.asyncio
    async def test_categorize_failure_yields_uncategorized(
        self, make_agent, fake_gemini, email_repo, default_prompts, sample_email_data
    ) -> None:
        agent = make_agent(fake_gemini([LLMTimeoutError("Request timed out after 30 seconds.")]))
        email = email_repo.create(**sample_email_data)

        category = await agent.categorize_email(email, default_prompts.get_by_name("categorization"))

        assert category is EmailCategory.UNCATEGORIZED

    @pytest.mark.asyncio
    async def test_extract_action_items_swallows_failures(
        self, make_agent, fake_gemini, email_repo, default_prompts, sample_email_data
    ) -> None:
        agent = make_agent(fake_gemini([LLMAPIError("Gemini API error: quota", status_code=429)]))
        email = email_repo.create(**sample_email_data)

        items = await agent.extract_action_items(email, default_prompts.get_by_name("action_item"))

        assert items == []

    @pytest.mark.asyncio
    async def test_generate_reply_propagates_errors(
        self, make_agent, fake_gemini, email_repo, default_prompts, sample_email_data
    ) -> None:
        agent = make_agent(fake_gemini([LLMAPIError("Gemini API error: bad key", status_code=403)]))
        email = email_repo.create(**sample_email_data)

        with pytest.raises(LLMAPIError):
            await agent.generate_reply(email, default_prompts.get_by_name("auto_reply"))

    @pytest.mark.asyncio
    async def test_draft_reply_payload(
        self, make_agent, fake_gemini, email_repo, default_prompts, sample_email_data
    ) -> None:
        client = fake_gemini(["Thanks Sarah, I'll be there."])
        agent = make_agent(client)
        email = email_repo.create(**sample_email_data)

        draft = await agent.draft_reply(
            email, default_prompts.get_by_name("auto_reply"), "Mention the budget."
        )

        assert draft["subject"] == "Re: Q4 Planning Meeting - Action Required"
        assert draft["body"] == "Thanks Sarah, I'll be there."
        assert draft["email_id"] == email.id
        assert draft["metadata"]["source"] == "auto_reply"
        assert "Additional instructions: Mention the budget." in client.calls[0][0]

    @pytest.mark.asyncio
    async def test_process_email_stores_category_and_items(
        self,
        make_agent,
        fake_gemini,
        email_repo,
        default_prompts,
        action_item_repo,
        sample_email_data,
    ) -> None:
        agent = make_agent(
            fake_gemini(
                [
                    "Important",
                    '[{"task": "Review budget proposal", "deadline": "Friday, 3 PM"},'
                    ' {"task": "Prepare departmental goals", "deadline": ""}]',
                ]
            )
        )
        email = email_repo.create(**sample_email_data)

        updated = await agent.process_email(
            email,
            default_prompts.get_by_name("categorization"),
            default_prompts.get_by_name("action_item"),
        )

        assert updated.category == "Important"
        assert updated.is_processed is True
        assert updated.needs_processing is False
        items = action_item_repo.list_for_email(email.id)
        assert {(i.task, i.deadline) for i in items} == {
            ("Review budget proposal", "Friday, 3 PM"),
            ("Prepare departmental goals", ""),
        }

    @pytest.mark.asyncio
    async def test_chat_embeds_behavior_prompts(
        self, make_agent, fake_gemini, email_repo, sample_email_data
    ) -> None:
        client = fake_gemini(["It asks you to review a budget."])
        agent = make_agent(client)
        email = email_repo.create(**sample_email_data)

        answer = await agent.chat("What is this about?", email, email_repo.list_all())

        assert answer == "It asks you to review a budget."
        user_message, system_message = client.calls[0]
        assert user_message == "What is this about?"
        assert "=== Agent Behavior Prompts ===" in system_message
        assert "Categorization prompt:\nYou are an email triage assistant." in system_message
        assert "Subject: Q4 Planning Meeting - Action Required" in system_message
        assert "Total emails: 1" in system_message

    @pytest.mark.asyncio
    async def test_chat_with_template_name_runs_template(
        self, make_agent, fake_gemini, email_repo, default_prompts, sample_email_data
    ) -> None:
        default_prompts.create(name="summarize", content="Summarize the email in one sentence.")
        client = fake_gemini(["A budget meeting needs scheduling."])
        agent = make_agent(client)
        email = email_repo.create(**sample_email_data)

        await agent.chat("  Summarize ", email)

        user_message, system_message = client.calls[0]
        assert system_message is None
        assert user_message.endswith("Summarize the email in one sentence.")
        assert "Subject: Q4 Planning Meeting - Action Required" in user_message

    @pytest.mark.asyncio
    async def test_undecodable_gemini_body_yields_fallbacks(
        self, make_agent, mock_settings, email_repo, default_prompts, sample_email_data
    ) -> None:
        """Transport-level decoding failures never escape categorize or extract."""
        agent = make_agent(_gemini_over(mock_settings, _corrupt_gzip))
        email = email_repo.create(**sample_email_data)

        category = await agent.categorize_email(email, default_prompts.get_by_name("categorization"))
        items = await agent.extract_action_items(email, default_prompts.get_by_name("action_item"))

        assert category is EmailCategory.UNCATEGORIZED
        assert items == []

    @pytest.mark.asyncio
    async def test_process_email_survives_undecodable_body(
        self, make_agent, mock_settings, email_repo, default_prompts, sample_email_data
    ) -> None:
        agent = make_agent(_gemini_over(mock_settings, _corrupt_gzip))
        email = email_repo.create(**sample_email_data)

        updated = await agent.process_email(
            email,
            default_prompts.get_by_name("categorization"),
            default_prompts.get_by_name("action_item"),
        )

        assert updated.category == "Uncategorized"
        assert updated.needs_processing is True
