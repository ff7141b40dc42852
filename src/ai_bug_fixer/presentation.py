"""Maps aggregation results onto host notifications, quick picks and the chat panel."""

import html

from .host import HostContext, NotificationLevel
from .models import FailureKind, SuggestionResult

QUICK_PICK_PLACEHOLDER = "AI Bug Fixer Suggestions"
CHAT_PANEL_TITLE = "AI Bug Fixer Chat"

NO_INPUT_MESSAGE = "No error log selected. Please highlight an error in the editor or copy one from the terminal."
ANALYZING_MESSAGE = "Analyzing error log..."
MISSING_KEY_NOTICE = "OpenAI API key is not set. Please configure it in settings."


def failure_notifications(result: SuggestionResult) -> list[tuple[NotificationLevel, str]]:
    """Describe each absorbed failure as a (level, message) notification."""
    notices: list[tuple[NotificationLevel, str]] = []
    for failure in result.failures:
        match failure.kind:
            case FailureKind.MISSING_CREDENTIAL:
                notices.append(("warning", MISSING_KEY_NOTICE))
            case FailureKind.LLM_REQUEST:
                notices.append(("warning", f"Error fetching AI response: {failure.message}"))
            case FailureKind.SEARCH_REQUEST:
                notices.append(("warning", f"Error fetching Stack Overflow data: {failure.message}"))
    return notices


async def report_failures(result: SuggestionResult, host: HostContext) -> None:
    for level, message in failure_notifications(result):
        await host.notify(level, message)


def format_suggestions(result: SuggestionResult) -> list[str]:
    """Quick-pick entries: the AI suggestion first, then one line per link."""
    return [f"AI Suggestion: {result.ai_suggestion}", *(f"{link.title} - {link.url}" for link in result.related_links)]


_CHAT_TEMPLATE = """<html>
<body>
    <h2>AI Debugging Chat</h2>
    <p><strong>Error Log:</strong> {error_log}</p>
    <textarea id="userInput" style="width: 100%; height: 50px;" placeholder="Ask follow-up questions..."></textarea>
    <button onclick="sendMessage()">Send</button>
    <div id="chatBox" style="margin-top: 20px; border: 1px solid #ccc; padding: 10px;"></div>

    <script>
        function sendMessage() {{
            const userInput = document.getElementById("userInput").value;
            const chatBox = document.getElementById("chatBox");
            const line = document.createElement("p");
            line.innerHTML = "<strong>You:</strong> ";
            line.appendChild(document.createTextNode(userInput));
            chatBox.appendChild(line);

            setTimeout(() => {{
                chatBox.innerHTML += "<p><strong>AI:</strong> Let me analyze that further...</p>";
            }}, 1000);
        }}
    </script>
</body>
</html>
"""


def render_chat_html(error_text: str) -> str:
    """Render the follow-up chat mock-up. It has no backend; replies are canned."""
    return _CHAT_TEMPLATE.format(error_log=html.escape(error_text))
