"""AI Client - Gemini calls for photo analysis, workouts and chat.

Every call is fallible and never raises: failures are logged and reported as
None so callers can show a generic retry message.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Optional

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from ..core.models import ChatMessage, FoodGuess, WorkoutGuess


logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

SYSTEM_INSTRUCTION = """
Você é uma inteligência artificial especialista em Nutrição Esportiva e Clínica
e também Educadora Física. Você ajuda pessoas a melhorar a saúde, emagrecer,
ganhar massa muscular ou aumentar a performance.

- Tom profissional, motivador e empático; científico mas acessível; zero julgamentos.
- Responda dúvidas sobre alimentação, macros, suplementação e calorias.
- Sugira treinos, explique metas e cálculos metabólicos, ajude a manter o foco.
- Responda sempre em português do Brasil, de forma concisa para leitura em celular.
"""

FOOD_PHOTO_PROMPT = """
Identify the food in this photo. Respond ONLY with a JSON object:
{"name": string, "calories": integer, "protein": number, "carbs": number, "fat": number,
 "micronutrients": {"vitamin_c": number, "iron": number, "calcium": number,
                    "potassium": number, "magnesium": number}}
Macros in grams, micronutrients in mg. If the photo shows no food, respond with {}.
"""

WORKOUT_PHOTO_PROMPT = """
Read this workout sheet. Respond ONLY with a JSON object:
{"exercises": [{"name": string, "sets": integer, "reps": string}]}
"""

HOME_WORKOUT_PROMPT = """
Create a complete home workout, including a warm-up and varied exercises.
Level: {level}
Duration: {duration} minutes
Available equipment: {equipment}
Respond ONLY with a JSON object:
{{"exercises": [{{"name": string, "sets": integer, "reps": string}}]}}
"""


@dataclass
class AIConfig:
    """Configuration for the Gemini client.

    Attributes:
        api_key: Gemini API key (None disables every call)
        model: Model name
    """

    api_key: Optional[str] = field(default_factory=lambda: os.environ.get("GEMINI_API_KEY") or None)
    model: str = field(default_factory=lambda: os.environ.get("GEMINI_MODEL", DEFAULT_MODEL))


def extract_json(raw_text: str) -> Optional[dict]:
    """Pull the JSON object out of a model reply.

    Models occasionally wrap the object in prose or code fences.

    Returns:
        The decoded object, or None if there is none
    """
    match = re.search(r"\{.*\}", raw_text or "", re.DOTALL)
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _parse(raw_text: str, model: type[BaseModel]) -> Optional[BaseModel]:
    data = extract_json(raw_text)
    if not data:
        return None
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("AI reply did not match %s: %s", model.__name__, str(e))
        return None


class NutritionAIClient:
    """Client for the external inference service."""

    def __init__(self, config: AIConfig | None = None) -> None:
        """Initialize the AI client.

        Args:
            config: AI configuration
        """
        self.config = config or AIConfig()
        self._client: genai.Client | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.config.api_key)

    @property
    def client(self) -> genai.Client:
        """Lazy initialization of the Gemini client."""
        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    def _generate_json(self, parts: list[types.Part]) -> Optional[str]:
        response = self.client.models.generate_content(
            model=self.config.model,
            contents=[types.Content(role="user", parts=parts)],
            config=types.GenerateContentConfig(
                response_mime_type="application/json", temperature=0.2
            ),
        )
        return response.text

    def analyze_food_photo(self, image_bytes: bytes, mime_type: str = "image/jpeg") -> Optional[FoodGuess]:
        """Estimate the nutrition of the food in a photo.

        Args:
            image_bytes: Raw image data
            mime_type: Image MIME type

        Returns:
            FoodGuess, or None if the food could not be identified
        """
        if not self.enabled:
            logger.warning("Food photo analysis skipped: GEMINI_API_KEY not set")
            return None
        try:
            raw = self._generate_json([
                types.Part.from_text(text=FOOD_PHOTO_PROMPT),
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            ])
        except Exception as e:
            logger.error("Food photo analysis failed: %s", str(e))
            return None
        return _parse(raw, FoodGuess)

    def analyze_workout_photo(self, image_bytes: bytes, mime_type: str = "image/jpeg") -> Optional[WorkoutGuess]:
        """Read the exercises off a photographed workout sheet."""
        if not self.enabled:
            logger.warning("Workout photo analysis skipped: GEMINI_API_KEY not set")
            return None
        try:
            raw = self._generate_json([
                types.Part.from_text(text=WORKOUT_PHOTO_PROMPT),
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            ])
        except Exception as e:
            logger.error("Workout photo analysis failed: %s", str(e))
            return None
        return _parse(raw, WorkoutGuess)

    def generate_home_workout(self, level: str, duration_minutes: int, equipment: str) -> Optional[WorkoutGuess]:
        """Ask for a home workout matching level, time and equipment."""
        if not self.enabled:
            logger.warning("Home workout generation skipped: GEMINI_API_KEY not set")
            return None
        prompt = HOME_WORKOUT_PROMPT.format(level=level, duration=duration_minutes, equipment=equipment)
        try:
            raw = self._generate_json([types.Part.from_text(text=prompt)])
        except Exception as e:
            logger.error("Home workout generation failed: %s", str(e))
            return None
        return _parse(raw, WorkoutGuess)

    def chat(self, message: str, history: list[ChatMessage]) -> Optional[str]:
        """Send a chat message with the prior conversation.

        Args:
            message: The user's new message
            history: Earlier messages, oldest first

        Returns:
            The reply text, or None on failure
        """
        if not self.enabled:
            logger.warning("Chat skipped: GEMINI_API_KEY not set")
            return None
        try:
            session = self.client.chats.create(
                model=self.config.model,
                config=types.GenerateContentConfig(system_instruction=SYSTEM_INSTRUCTION),
                history=[
                    types.Content(role=m.role, parts=[types.Part.from_text(text=m.text)])
                    for m in history
                ],
            )
            response = session.send_message(message)
        except Exception as e:
            logger.error("Chat request failed: %s", str(e))
            return None
        return response.text or None
