from __future__ import annotations

import uuid
from typing import Any, Dict, Optional

from pydantic import ValidationError

from scenario_content.core.assembler import ContentAssembler
from scenario_content.core.schemas import CalculatorInputs, ContentRequest, ErrorEnvelope
from scenario_content.utils.goal_classifier import classify_goal
from scenario_content.utils.locale_resources import ContentConfigurationError
from scenario_content.utils.logging import get_logger, set_log_context
from scenario_content.utils.seo import scenario_metadata, validate_scenario_params
from scenario_content.utils.slug_codec import decode_slug, encode_slug, is_consistent

logger = get_logger("content_tools")

_ALIASES = {
    "initial_investment": "initial_amount",
    "current_savings": "initial_amount",
    "monthly_investment": "monthly_contribution",
    "expected_return": "annual_return",
    "years": "time_horizon",
    "time_horizon_years": "time_horizon",
}


def _canonical(payload: Dict[str, Any]) -> Dict[str, Any]:
    p = dict(payload or {})
    # map common aliases -> canonical CalculatorInputs fields
    for alias, field in _ALIASES.items():
        if field not in p and alias in p:
            p[field] = p.pop(alias)
    return p


def _error(code: str, exc: Exception) -> Dict[str, Any]:
    return {"error": ErrorEnvelope(code=code, message=str(exc)).model_dump()}


def tool_encode_slug(payload: Dict[str, Any], goal: Optional[str] = None) -> Dict[str, Any]:
    try:
        inputs = CalculatorInputs(**_canonical(payload))
    except ValidationError as e:
        return _error("INVALID_INPUTS", e)

    tag = goal or classify_goal(inputs).value
    slug = encode_slug(inputs, tag)
    set_log_context(slug=slug)
    logger.info("Encoded scenario goal=%s", tag)
    return {
        "slug": slug,
        "goal": tag,
        "publishable": validate_scenario_params(inputs),
        "metadata": scenario_metadata(inputs).model_dump(),
    }


def tool_decode_slug(slug: str) -> Dict[str, Any]:
    set_log_context(slug=slug)
    params = decode_slug(slug)
    if params is None:
        return _error("INVALID_SLUG", ValueError(f"Not a valid scenario identifier: {slug}"))
    out = params.model_dump()
    out["goal_consistent"] = is_consistent(params)
    return out


def tool_generate_content(payload: Dict[str, Any], assembler: Optional[ContentAssembler] = None) -> Dict[str, Any]:
    p = dict(payload or {})
    set_log_context(request_id=str(p.pop("request_id", None) or uuid.uuid4()))
    if "inputs" not in p:
        inputs = {k: p.pop(k) for k in list(p) if k not in ContentRequest.model_fields and k not in
                  ("futureValue", "totalContributions", "totalGains")}
        p["inputs"] = _canonical(inputs)
    else:
        p["inputs"] = _canonical(p["inputs"])

    try:
        req = ContentRequest(**p)
    except ValidationError as e:
        return _error("INVALID_INPUTS", e)

    try:
        sections = (assembler or ContentAssembler()).run(req)
    except ContentConfigurationError as e:
        logger.error("Content generation failed: %s", e)
        return _error("CONFIGURATION_ERROR", e)
    return sections.model_dump()
