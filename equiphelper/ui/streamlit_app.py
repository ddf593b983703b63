"""
streamlit_app.py — equipHelper chat page
----------------------------------------

Run with ``streamlit run equiphelper/ui/streamlit_app.py`` while the answer
service is reachable at ``ANSWER_SERVICE_URL``.
"""
import asyncio
from pathlib import Path

import streamlit as st

from equiphelper.app.config import get_settings
from equiphelper.ui.client import AnswerClient
from equiphelper.ui.conversation import ConversationController
from equiphelper.ui.storage import JsonFileStorage

IMAGES_ROOT = Path("public")

settings = get_settings()

st.set_page_config(page_title="equipHelper", page_icon="🚒", layout="centered")


def _controller() -> ConversationController:
    if "controller" not in st.session_state:
        st.session_state.controller = ConversationController(
            answers=AnswerClient(settings.answer_service_url),
            storage=JsonFileStorage(settings.history_dir),
            export_path=settings.history_dir / settings.export_filename,
        )
    return st.session_state.controller


def _show_message(controller: ConversationController, message) -> None:
    role = "user" if message.type == "user" else "assistant"
    with st.chat_message(role):
        st.caption("User" if message.type == "user" else "equipHelper")
        if message.type == "user":
            st.write(message.text)
            return
        for segment in controller.render_message_text(message.text):
            if segment.kind == "image":
                local = IMAGES_ROOT / segment.value.lstrip("/")
                if local.exists():
                    st.image(str(local), width=500)
                else:
                    st.caption(segment.value)
            else:
                st.markdown(segment.value)


controller = _controller()

st.title("equipHelper")

left, right = st.columns(2)
if left.button("Clear History"):
    controller.clear_history()
if right.button("Download PDF"):
    exported = controller.export_to_document()
    st.download_button(
        "Save PDF",
        data=exported.read_bytes(),
        file_name=settings.export_filename,
        mime="application/pdf",
    )

for message in controller.messages:
    _show_message(controller, message)

if controller.first_visit:
    st.info("Welcome! Ask me about firefighting equipment or maintenance.")

options = [""] + [category.value for category in controller.catalog.categories]
current = controller.selected_equipment.value if controller.selected_equipment else ""
selected = st.selectbox(
    "Select Equipment:",
    options,
    index=options.index(current),
    format_func=lambda value: value or "Select Equipment",
)
if selected != current:
    controller.select_equipment(selected or None)

if controller.selected_equipment:
    st.subheader("Predefined Questions:")
    for index, predefined in enumerate(controller.questions_for_selection()):
        if st.button(predefined, key=f"predefined-{index}"):
            with st.spinner("Thinking..."):
                asyncio.run(controller.select_predefined_question(predefined))
            st.rerun()

typed = st.chat_input("Type your question...")
if typed:
    with st.spinner("Thinking..."):
        asyncio.run(controller.submit_question(typed))
    st.rerun()
