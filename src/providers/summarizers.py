"""Text summarization adapters (OpenAI chat completions and Gemini)."""

from __future__ import annotations

from google import genai
from openai import AsyncOpenAI

DEFAULT_INSTRUCTION = "Summarize this article in 2 sentences:"


class OpenAISummarizer:
    name = "openai"

    def __init__(
        self,
        api_key: str | None,
        model: str = "gpt-4-turbo",
        temperature: float = 0.7,
        instruction: str = DEFAULT_INSTRUCTION,
        client: AsyncOpenAI | None = None,
    ):
        self.model = model
        self.temperature = temperature
        self.instruction = instruction
        self._api_key = api_key
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def summarize(self, text: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": self.instruction},
                {"role": "user", "content": text},
            ],
            temperature=self.temperature,
        )
        return response.choices[0].message.content or ""


class GeminiSummarizer:
    name = "gemini"

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.0-flash",
        instruction: str = DEFAULT_INSTRUCTION,
        client: genai.Client | None = None,
    ):
        self.model = model
        self.instruction = instruction
        self._api_key = api_key
        self._client = client

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def summarize(self, text: str) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=f"{self.instruction} {text}",
        )
        return response.text or ""
