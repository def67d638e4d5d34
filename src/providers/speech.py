"""Speech synthesis adapters (OpenAI TTS and Google Cloud Text-to-Speech)."""

from __future__ import annotations

from google.cloud import texttospeech
from openai import AsyncOpenAI


class OpenAISpeech:
    """OpenAI TTS with the provider's default model and voice."""

    name = "openai-tts"

    def __init__(
        self,
        api_key: str | None,
        model: str = "tts-1",
        voice: str = "alloy",
        client: AsyncOpenAI | None = None,
    ):
        self.model = model
        self.voice = voice
        self._api_key = api_key
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def synthesize(self, text: str) -> bytes:
        response = await self.client.audio.speech.create(
            model=self.model,
            voice=self.voice,
            input=text,
        )
        return response.content


class GoogleCloudSpeech:
    """Google Cloud TTS with an explicit locale, voice gender and encoding.

    Authenticates with application default credentials
    (GOOGLE_APPLICATION_CREDENTIALS).
    """

    name = "google-tts"

    def __init__(
        self,
        language_code: str = "en-US",
        ssml_gender: str = "NEUTRAL",
        audio_encoding: str = "MP3",
        client: texttospeech.TextToSpeechAsyncClient | None = None,
    ):
        self.language_code = language_code
        self.ssml_gender = ssml_gender
        self.audio_encoding = audio_encoding
        self._client = client

    @property
    def client(self) -> texttospeech.TextToSpeechAsyncClient:
        if self._client is None:
            self._client = texttospeech.TextToSpeechAsyncClient()
        return self._client

    async def synthesize(self, text: str) -> bytes:
        response = await self.client.synthesize_speech(
            input=texttospeech.SynthesisInput(text=text),
            voice=texttospeech.VoiceSelectionParams(
                language_code=self.language_code,
                ssml_gender=texttospeech.SsmlVoiceGender[self.ssml_gender],
            ),
            audio_config=texttospeech.AudioConfig(
                audio_encoding=texttospeech.AudioEncoding[self.audio_encoding],
            ),
        )
        return response.audio_content
