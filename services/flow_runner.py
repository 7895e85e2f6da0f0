import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar, Union

from openai import OpenAI, OpenAIError
from pydantic import BaseModel, ValidationError as SchemaValidationError

from core.config import settings
from core.errors import GenerationFailed
from utils.templater import render_template

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_client: Optional[OpenAI] = None


def get_client() -> OpenAI:
    global _client
    if _client is None:
        _client = OpenAI(api_key=settings.openai_api_key)
    return _client


def _tokens_used(resp: Any) -> int:
    usage = getattr(resp, "usage", None)
    if usage is None:
        return 0
    return int((getattr(usage, "prompt_tokens", 0) or 0) + (getattr(usage, "completion_tokens", 0) or 0))


_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def _strip_code_fence(raw: str) -> str:
    # models without JSON mode sometimes wrap the object in a markdown fence
    m = _FENCE.match(raw.strip())
    return m.group(1) if m else raw


def render_prompt(template: str, output_model: Type[BaseModel], **data) -> str:
    return render_template(template, schema=output_model.model_json_schema(), **data)


def run_flow(
        flow: str,
        output_model: Type[M],
        system: str,
        user_content: Union[str, List[Dict[str, Any]]],
        model: Optional[str] = None,
        json_mode: bool = True,
) -> Tuple[M, int]:
    """Send one prompt to the model and validate the JSON it returns.

    Returns the validated output and the number of tokens the call consumed.
    Raises GenerationFailed on provider errors, non-JSON output or schema mismatch.
    """
    model_name = model or settings.llm_model
    kwargs: Dict[str, Any] = dict(
        model=model_name,
        temperature=settings.llm_temperature,
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": user_content},
        ],
    )
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    logger.info("flow=%s model=%s prompt_version=%s started", flow, model_name, settings.prompt_version)
    try:
        resp = get_client().chat.completions.create(**kwargs)
    except OpenAIError as e:
        logger.warning("flow=%s model call failed: %s", flow, e)
        raise GenerationFailed(flow, f"model call failed: {e}") from e

    if not resp.choices:
        raise GenerationFailed(flow, "model returned no choices")
    raw = _strip_code_fence(resp.choices[0].message.content or "")
    try:
        data = json.loads(raw)
        out = output_model.model_validate(data)
    except json.JSONDecodeError as e:
        logger.warning("flow=%s returned non-JSON output (%d chars)", flow, len(raw))
        raise GenerationFailed(flow, "model output is not valid JSON") from e
    except SchemaValidationError as e:
        logger.warning("flow=%s output failed schema validation: %s", flow, e.errors()[:3])
        raise GenerationFailed(flow, "model output does not match the expected schema") from e

    tokens = _tokens_used(resp)
    logger.info("flow=%s completed tokens=%d", flow, tokens)
    return out, tokens
