"""Chat model selection for the configured provider."""
from __future__ import annotations

import logging

from langchain_core.language_models import BaseLanguageModel
from langchain_core.messages import AIMessage

from equiphelper.app.config import Settings

logger = logging.getLogger(__name__)


class LocalEchoModel:
    async def ainvoke(self, prompt):
        content = getattr(prompt, "content", str(prompt))
        asked = [line for line in content.splitlines() if line.startswith("User: ")]
        return AIMessage(content=f"[mock-response] {asked[-1][len('User: '):] if asked else ''}")


def build_model(settings: Settings) -> BaseLanguageModel | LocalEchoModel:
    # OpenAI first, then Gemini, then Groq
    if settings.openai_api_key:
        from langchain_openai import ChatOpenAI

        logger.info("Using OpenAI model %s", settings.llm_model)
        return ChatOpenAI(
            api_key=settings.openai_api_key,
            model=settings.llm_model,
            temperature=settings.llm_temperature,
        )
    if settings.gemini_api_key:
        from langchain_google_genai import ChatGoogleGenerativeAI

        logger.info("Using Google Gemini model %s", settings.gemini_model)
        return ChatGoogleGenerativeAI(
            google_api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            temperature=settings.llm_temperature,
        )
    if settings.groq_api_key:
        from langchain_groq import ChatGroq

        logger.info("Using Groq model %s", settings.groq_model)
        return ChatGroq(
            groq_api_key=settings.groq_api_key,
            model_name=settings.groq_model,
            temperature=settings.llm_temperature,
        )
    logger.warning("No API keys found (OPENAI_API_KEY, GEMINI_API_KEY or GROQ_API_KEY). Using LocalEchoModel.")
    return LocalEchoModel()
