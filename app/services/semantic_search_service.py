"""Natural-language search: free text -> ``PropertyFilter`` via Gemini.

The model receives a fixed system instruction describing the filter schema
and must answer with JSON only. Its answer may still come wrapped in
markdown fences, which are stripped before validation. Nothing is retried.
"""
import asyncio
import re
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from app.config import settings
from app.core.exceptions import AIServiceError, InvalidResponseError, MalformedFilterError
from app.core.logging import get_logger
from app.schemas.property_schema import PropertyFilter

logger = get_logger(__name__)

SEMANTIC_SEARCH_INSTRUCTION = """
{
  "role": "system",
  "instruction": {
    "purpose": "Parse natural language real estate searches into a structured PropertyFilter JSON.",
    "rules": [
      "Extract only information explicitly mentioned or strongly implied in the text.",
      "If a field is not mentioned, return null.",
      "Do not invent values.",
      "Do not return explanations or comments.",
      "Return only valid JSON."
    ],
    "output_format": {
      "maxPrice": null,
      "city": null,
      "state": null,
      "propertyType": null,
      "listingType": null,
      "minBedrooms": null,
      "minBathrooms": null,
      "minParkingSpaces": null,
      "minArea": null,
      "maxArea": null,
      "isFurnished": null,
      "acceptsPets": null
    },
    "allowed_values": {
      "propertyType": ["APARTMENT", "HOUSE", "STUDIO", "KITNET", "COMMERCIAL"],
      "listingType": ["RENT", "SALE"]
    },
    "semantic_rules": {
      "listingType": {
        "RENT": ["alugar", "aluguel", "para alugar"],
        "SALE": ["comprar", "venda", "à venda"]
      },
      "propertyType": {
        "APARTMENT": ["apê", "apartamento", "ap"],
        "HOUSE": ["casa"]
      },
      "acceptsPets": ["aceita pets", "pet friendly", "permite animais"],
      "isFurnished": ["mobiliado"],
      "minBedrooms": ["pelo menos X quartos", "com X quartos"],
      "maxPrice": ["até X reais"]
    },
    "ambiguity_policy": "If there is doubt or ambiguity, prefer null."
  }
}
""".strip()

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def parse_filter_response(raw: Optional[str]) -> PropertyFilter:
    """Validate the model's raw answer as a ``PropertyFilter``.

    Raises:
        InvalidResponseError: the model returned nothing.
        MalformedFilterError: the answer is not JSON or does not fit the schema.
    """
    if not raw:
        raise InvalidResponseError("Empty AI response")

    candidate = strip_code_fences(raw)
    try:
        # só as chaves camelCase do esquema contam; tipos não são convertidos
        return PropertyFilter.model_validate_json(candidate, strict=True, by_alias=True, by_name=False)
    except PydanticValidationError as exc:
        logger.warning("AI response is not a valid property filter: %s", candidate[:500])
        raise MalformedFilterError(
            "AI response could not be parsed into a property filter",
            detail=exc.errors(include_url=False),
        ) from exc


_client: Any = None


def _get_client():
    global _client
    if _client is None:
        if not settings.google_genai_api_key:
            raise AIServiceError("google_genai_api_key is not configured")
        try:
            from google import genai
            _client = genai.Client(api_key=settings.google_genai_api_key)
        except Exception as exc:
            raise AIServiceError("google-genai client could not be created", detail=str(exc)) from exc
    return _client


def _call_ai_for_filter(text: str) -> Optional[str]:
    """Chama a API Gemini de forma síncrona (bloqueante).

    NOTA: chamada sempre via run_in_executor a partir de extract_filter.
    """
    client = _get_client()
    try:
        response = client.models.generate_content(
            model=settings.google_genai_model,
            config={
                "system_instruction": SEMANTIC_SEARCH_INSTRUCTION,
                "temperature": settings.google_genai_temperature,
                "response_mime_type": "application/json",
            },
            contents=text,
        )
    except Exception as exc:
        logger.exception("AI semantic search call failed")
        raise AIServiceError("AI semantic search call failed", detail=str(exc)) from exc
    return response.text


async def extract_filter(text: str) -> PropertyFilter:
    """Translate free text into a ``PropertyFilter``, bounded by ``ai_request_timeout``."""
    loop = asyncio.get_running_loop()
    try:
        raw = await asyncio.wait_for(
            loop.run_in_executor(None, _call_ai_for_filter, text),
            timeout=settings.ai_request_timeout,
        )
    except asyncio.TimeoutError as exc:
        logger.error("AI semantic search timed out after %.1fs", settings.ai_request_timeout)
        raise AIServiceError("AI semantic search timed out") from exc

    criteria = parse_filter_response(raw)
    logger.info("Semantic search extracted filter %s", criteria.model_dump(exclude_none=True, mode="json"))
    return criteria
