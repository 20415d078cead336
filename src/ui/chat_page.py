"""NiceGUI chat interface consuming the UI message stream."""

import asyncio
import html
import json
import re

from nicegui import ui

from src.agent.config import AVAILABLE_MODELS
from src.models.schemas import PartType, ToolState, UIMessage
from src.ui.session import ChatSession, stream_chat_response


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists.
    """
    # Escape HTML entities first
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

    # Code blocks (```code```)
    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )

    # Inline code (`code`)
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"\*([^*\n]+)\*", r"<em>\1</em>", text)

    # Links [text](url)
    text = re.sub(
        r"\[([^\]]+)\]\((https?://[^)\s]+)\)",
        r'<a href="\2" class="text-blue-600 underline" target="_blank">\1</a>',
        text,
    )

    text = _wrap_list_items(text, r"^[-*]\s+", "ul", "list-disc")
    text = _wrap_list_items(text, r"^\d+\.\s+", "ol", "list-decimal")

    # Line breaks (preserve newlines as <br>)
    return text.replace("\n", "<br>")


def _wrap_list_items(text: str, marker: str, tag: str, style: str) -> str:
    in_list = False
    result = []
    for line in text.split("\n"):
        stripped = line.strip()
        if re.match(marker, stripped):
            if not in_list:
                result.append(f'<{tag} class="{style} list-inside my-2 space-y-1">')
                in_list = True
            result.append(f"<li>{re.sub(marker, '', stripped)}</li>")
        else:
            if in_list:
                result.append(f"</{tag}>")
                in_list = False
            result.append(line)
    if in_list:
        result.append(f"</{tag}>")
    return "\n".join(result)


CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .message-user {
        background: #1f2937;
        color: white;
        border-radius: 12px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 12px;
    }

    .tool-card {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 6px;
    }

    .message-assistant pre { margin: 0.5rem 0; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""

MODEL_OPTIONS = {value: label for value, label in AVAILABLE_MODELS}


def model_options(selected: str) -> dict[str, str]:
    """Selectable models for one page, including ``selected`` if unlisted."""
    options = dict(MODEL_OPTIONS)
    options.setdefault(selected, selected)
    return options


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()
    options = model_options(session.model)

    current_task: asyncio.Task | None = None

    messages_container: ui.column
    error_banner: ui.label
    input_field: ui.input
    send_btn: ui.button
    stop_btn: ui.button
    clear_btn: ui.button

    def render_avatar(is_user: bool) -> None:
        color = "bg-gray-300" if is_user else "bg-gray-800"
        icon = "person" if is_user else "smart_toy"
        with ui.element("div").classes(
            f"w-8 h-8 shrink-0 rounded-full flex items-center justify-center {color}"
        ):
            ui.icon(icon).classes("text-white text-base")

    def render_tool(part) -> None:
        with ui.element("div").classes("tool-card p-2 text-xs"):
            ui.label(f"Tool: {part.tool_name}").classes("font-medium")
            if part.state == ToolState.RESULT and part.result is not None:
                ui.html(
                    f"<pre>{html.escape(json.dumps(part.result, indent=2))}</pre>", sanitize=False
                ).classes("mt-1 text-gray-500")

    def render_message(msg: UIMessage) -> None:
        is_user = msg.role == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align} gap-4 no-wrap"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes(
                f"max-w-[80%] gap-2 {'items-end' if is_user else 'items-start'}"
            ):
                if msg.text:
                    with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                        if is_user:
                            ui.label(msg.text).classes("text-sm whitespace-pre-wrap")
                        else:
                            ui.html(markdown_to_html(msg.text), sanitize=False).classes(
                                "text-sm leading-relaxed"
                            )
                for part in msg.parts:
                    if part.type == PartType.TOOL:
                        render_tool(part)
            if is_user:
                render_avatar(True)

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            visible = session.display_messages
            if not visible:
                with ui.column().classes("w-full py-12 items-center justify-center gap-2"):
                    ui.icon("smart_toy").classes("text-5xl text-gray-300")
                    ui.label("Start a conversation").classes("text-lg font-semibold")
                    ui.label("Ask me anything, and I'll do my best to help you!").classes(
                        "text-sm text-gray-400"
                    )
            else:
                for msg in visible:
                    render_message(msg)
            if session.is_busy:
                with ui.row().classes("w-full justify-start gap-4"):
                    render_avatar(False)
                    with ui.element("div").classes("message-assistant px-4 py-3"):
                        ui.spinner(size="sm")
        refresh_controls()

    def refresh_controls() -> None:
        busy = session.is_busy
        input_field.set_enabled(not busy)
        send_btn.set_visibility(not busy)
        stop_btn.set_visibility(busy)
        clear_btn.set_enabled(bool(session.display_messages))
        error_banner.set_text(f"Error: {session.error}" if session.error else "")
        error_banner.set_visibility(session.error is not None)

    async def send_message() -> None:
        nonlocal current_task
        text = (input_field.value or "").strip()
        if not text or session.is_busy:
            return

        input_field.value = ""
        payload = session.submit(text)
        refresh_messages()

        current_task = asyncio.create_task(
            stream_chat_response(session, payload, refresh_messages)
        )
        try:
            await current_task
        except asyncio.CancelledError:
            # Stopped by the user; the transcript keeps what already arrived
            pass
        finally:
            current_task = None
            refresh_messages()

    def stop_stream() -> None:
        session.stop()
        if current_task is not None:
            current_task.cancel()
        refresh_messages()

    def clear_chat() -> None:
        stop_stream()
        session.clear()
        refresh_messages()

    def select_model(e) -> None:
        session.model = e.value

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full px-5 py-4 items-center justify-between border-b"):
            ui.label("AI Chatbot").classes("text-xl font-semibold")
            with ui.row().classes("items-center gap-2"):
                ui.select(
                    options, value=session.model, on_change=select_model
                ).props("outlined dense").classes("w-44")
                clear_btn = ui.button(icon="delete", on_click=clear_chat).props(
                    "outline round"
                )

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full"),
            ui.column().classes("w-full p-6"),
        ):
            messages_container = ui.column().classes("w-full gap-4")

        # Input
        with ui.column().classes("w-full p-4 gap-2 border-t"):
            error_banner = ui.label().classes(
                "w-full rounded-md border border-red-500 bg-red-50 p-3 text-sm text-red-600"
            )
            with ui.row().classes("w-full gap-2 items-center no-wrap"):
                input_field = (
                    ui.input(placeholder="Type your message...")
                    .props("outlined dense")
                    .classes("flex-grow")
                    .on("keydown.enter", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props("unelevated")
                stop_btn = ui.button("Stop", icon="stop", on_click=stop_stream).props(
                    "outline"
                )

        refresh_messages()


def main() -> None:
    ui.run(title="AI Chatbot", port=8080, reload=False)


if __name__ == "__main__":
    main()
