"""Tests for the agent system prompt."""

from datetime import date

from agent.prompt import get_page_manager_prompt
from tools.schemas import ToolName


def test_prompt_carries_today():
    assert date.today().isoformat() in get_page_manager_prompt()


def test_prompt_only_mentions_registered_tools():
    prompt = get_page_manager_prompt()
    registered = {name.value for name in ToolName}

    mentioned = {word.strip(".,()/") for word in prompt.split() if word.startswith("fb_")}
    mentioned.discard("fb_*")

    assert mentioned
    assert mentioned <= registered
