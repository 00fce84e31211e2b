# =============================================================================
# main.py  -  Interactive entry point for the Facebook Page agent
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. .env is loaded (FACEBOOK_ACCESS_TOKEN, FACEBOOK_PAGE_ID,
#      OPENROUTER_API_KEY, AGENT_MODEL ...)
#   2. The ADK agent is created; it spawns tools/mcp_server.py over stdio
#   3. Each line you type is sent to the agent, which calls fb_* tools
#   4. Every fb_* call is echoed with its outcome.  A rejected call shows the
#      validation or Graph API detail, even when the model says nothing.
#
# To run only the tool server (for another MCP host):
#   python -m tools.mcp_server
# =============================================================================

import asyncio

from dotenv import load_dotenv

# LiteLlm and the spawned MCP server both read their keys from the
# environment, so this must run before the agent is created.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.page_agent import create_agent
from agent.tool_events import tool_error_from_response

APP_NAME = "facebook_page_manager"
USER_ID = "page_admin"
EXIT_WORDS = ("quit", "exit", "q")


async def ask(runner: Runner, session_id: str, text: str) -> tuple[str, list[str]]:
    """Send one admin message; return the final reply and any tool failures.

    Tool calls are printed as they happen so the admin can see which page
    objects the agent touched.
    """
    message = types.Content(role="user", parts=[types.Part(text=text)])
    reply = ""
    failures: list[str] = []

    async for event in runner.run_async(user_id=USER_ID, session_id=session_id, new_message=message):
        for part in (event.content.parts if event.content else None) or []:
            if part.function_call:
                args = ", ".join(f"{k}={v!r}" for k, v in (part.function_call.args or {}).items())
                print(f"  🔧 {part.function_call.name}({args})")
            elif part.function_response:
                error = tool_error_from_response(part.function_response.response)
                name = part.function_response.name
                if error:
                    failures.append(f"{name}: {error}")
                    print(f"  ✗ {name} failed")
                else:
                    print(f"  ✓ {name} done")
            elif part.text:
                reply = part.text

    return reply, failures


async def run_agent():
    """Run the page-manager agent in a read-eval-print loop."""
    print("=" * 70)
    print("  FACEBOOK PAGE MANAGER AGENT")
    print("=" * 70)
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(agent=agent, app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("💬 Ask about your page: posts, comments, insights, messages.")
    print("   (Type 'quit' to exit)\n")

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if user_input.lower() in EXIT_WORDS:
            break
        if not user_input:
            continue

        reply, failures = await ask(runner, session.id, user_input)

        for failure in failures:
            print(f"\n⚠️  {failure}")
        if reply:
            print(f"\n🤖 Agent:\n\n{reply}")
        elif not failures:
            print("\n⚠️  The agent returned no text for this request.")

    print("\n👋 Goodbye!")


if __name__ == "__main__":
    asyncio.run(run_agent())
