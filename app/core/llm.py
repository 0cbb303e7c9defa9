"""
Thin wrapper around LangChain chat models for single-turn prompts.
"""

from typing import Any, Dict

from langchain.chat_models import init_chat_model
from langchain_core.prompts import ChatPromptTemplate


def response_text(response: Any) -> str:
    """
    Return the text of a chat model response.

    Anthropic replies may carry a list of content blocks; the first text block
    is used in that case.
    """
    content = response.content
    if isinstance(content, str):
        return content

    for block in content or []:
        if isinstance(block, str):
            return block
        if isinstance(block, dict) and block.get("type") == "text":
            return block.get("text", "")
    return ""


def run_prompt(
    template: str,
    variables: Dict[str, Any],
    *,
    api_key: str,
    model: str,
    model_provider: str,
    temperature: float,
    max_tokens: int,
) -> str:
    """
    Render a user-message prompt and send it to the chat model.

    Args:
        template: ChatPromptTemplate source for the user message
        variables: Values for the template placeholders
        api_key: Provider API key
        model: Model name
        model_provider: LangChain provider name
        temperature: Sampling temperature
        max_tokens: Maximum tokens in the reply

    Returns:
        Reply text
    """
    llm = init_chat_model(
        model=model,
        model_provider=model_provider,
        temperature=temperature,
        max_tokens=max_tokens,
        api_key=api_key,
    )

    prompt = ChatPromptTemplate.from_messages([("human", template)])
    messages = prompt.format_messages(**variables)
    return response_text(llm.invoke(messages))
