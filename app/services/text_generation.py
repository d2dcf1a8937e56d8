import logging
from typing import List, Optional, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from app.core.config import settings
from app.core.exceptions import InternalError, ValidationError, handle_unexpected
from app.schemas.ai import ChatTurn
from app.services.prompts import CHAT_SYSTEM_PROMPT, DESCRIPTION_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


def history_to_messages(history: Optional[Sequence[ChatTurn]]) -> List[BaseMessage]:
    """
    Maps client chat history onto LangChain messages. Turns before the
    first user turn are dropped.
    """
    messages: List[BaseMessage] = []
    for turn in history or []:
        if turn.role == "user":
            messages.append(HumanMessage(content=turn.content))
        elif messages:
            messages.append(AIMessage(content=turn.content))
    return messages


class TextGenerationService:
    """Stateless pass-through to the chat model."""

    def __init__(self, llm=None):
        self.llm = llm or ChatOpenAI(
            model=settings.openai_model,
            openai_api_key=settings.openai_api_key,
        )

    async def _complete(self, messages: List[BaseMessage], failure_message: str) -> str:
        try:
            response = await self.llm.ainvoke(messages)
        except Exception as e:
            logger.exception(f"Text generation failed: {e}")
            raise InternalError(failure_message) from e
        return response.content

    @handle_unexpected("generate description")
    async def generate_description(self, prompt: Optional[str]) -> str:
        if not prompt:
            raise ValidationError("A prompt is required.")
        return await self._complete(
            [SystemMessage(content=DESCRIPTION_SYSTEM_PROMPT), HumanMessage(content=prompt)],
            "An internal server error occurred.",
        )

    @handle_unexpected("chat")
    async def chat(self, message: Optional[str], history: Optional[Sequence[ChatTurn]] = None) -> str:
        if not message:
            raise ValidationError("Message is required.")
        messages: List[BaseMessage] = [SystemMessage(content=CHAT_SYSTEM_PROMPT)]
        messages.extend(history_to_messages(history))
        messages.append(HumanMessage(content=message))
        return await self._complete(messages, "Failed to get response from AI.")
