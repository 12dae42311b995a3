"""
AI Layout Advisor: exhibition floor-plan review.

Uses any OpenAI-compatible chat endpoint (xAI Grok by default) to comment
on a booth layout: space efficiency, pillar intrusion, and which kinds of
exhibits suit each booth opening. The area figures themselves are always
computed locally; the model only writes the prose.

When no API key is configured, the request times out, or the reply
cannot be parsed, a rule-based review is returned instead.
"""

import json
import logging
import re
from typing import List, Optional

from config import AI_API_KEY, AI_BASE_URL, AI_MODEL, AI_TIMEOUT_SECONDS
from services.booth_engine import layout_summary
from services.booth_engine.zone_model import Zone

logger = logging.getLogger(__name__)

# Lazy-initialized OpenAI client
_ai_client = None


def _get_ai_client():
    """Lazy initialization of the chat client using the OpenAI SDK."""
    global _ai_client
    if _ai_client is None and AI_API_KEY:
        from openai import OpenAI
        _ai_client = OpenAI(
            api_key=AI_API_KEY,
            base_url=AI_BASE_URL,
            timeout=AI_TIMEOUT_SECONDS,
            max_retries=0,
        )
    return _ai_client


# ============================================================================
# PROMPTS
# ============================================================================

PLANNER_SYSTEM_PROMPT = """You are a professional exhibition floor-plan planner. \
You review booth layouts for trade fairs and expos. You are concise and practical."""


ANALYZE_PROMPT = """Analyze the exhibition floor plan below.

Scale: 1 world unit = {scale_ratio} cm
Booths (areas in m²): {booths}
Total pillars: {pillar_count}

1. Comment on space efficiency (usable area / total area).
2. Give concrete advice for booths that lose space to pillar intrusion.
3. Suggest which kinds of exhibits suit each booth type (e.g. island vs single open).

Respond with JSON only, using this schema:
```json
{{
  "analysis": "<short paragraph summarizing layout quality>",
  "suggestions": ["<suggestion 1>", "<suggestion 2>", "<suggestion 3>"]
}}
```"""


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def _extract_json_from_response(text: str) -> Optional[dict]:
    """Extract JSON data from AI response text."""
    json_match = re.search(r'```json\s*(.*?)\s*```', text, re.DOTALL)
    if json_match:
        try:
            return json.loads(json_match.group(1))
        except json.JSONDecodeError:
            pass

    json_match = re.search(r'\{.*\}', text, re.DOTALL)
    if json_match:
        try:
            return json.loads(json_match.group())
        except json.JSONDecodeError:
            pass

    return None


def _format_suggestion(analysis: str, suggestions: List[str]) -> str:
    if not suggestions:
        return analysis
    lines = "\n".join(f"- {s}" for s in suggestions)
    return f"{analysis}\n\nSuggestions:\n{lines}"


def _result(summary: dict, suggestion: str, provider: str, error: Optional[str] = None) -> dict:
    result = {
        "totalArea": summary["total_area"],
        "usableArea": summary["usable_area"],
        "pillarIntrusion": summary["pillar_intrusion"],
        "suggestion": suggestion,
        "provider": provider,
    }
    if error:
        result["error"] = error
    return result


# ============================================================================
# PUBLIC API
# ============================================================================

async def analyze_layout(zones: List[Zone], scale_ratio: float) -> dict:
    """
    Review a booth layout.

    Args:
        zones: Every zone in the layout (booths and pillars).
        scale_ratio: Centimeters per world unit.

    Returns:
        Dict with totalArea, usableArea, pillarIntrusion (m²),
        suggestion (text) and provider ("ai" or "fallback").
    """
    summary = layout_summary(zones, scale_ratio)
    client = _get_ai_client()

    if client is None:
        return _fallback_analysis(summary)

    prompt = ANALYZE_PROMPT.format(
        scale_ratio=scale_ratio,
        booths=json.dumps(summary["booths"], ensure_ascii=False),
        pillar_count=summary["pillar_count"],
    )

    try:
        response = client.chat.completions.create(
            model=AI_MODEL,
            messages=[
                {"role": "system", "content": PLANNER_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=0.5,
            max_tokens=1024,
        )

        reply = response.choices[0].message.content or ""
        extracted = _extract_json_from_response(reply)
        if not extracted or "analysis" not in extracted:
            raise ValueError("AI reply did not contain the expected JSON")

        suggestion = _format_suggestion(
            str(extracted["analysis"]),
            [str(s) for s in extracted.get("suggestions") or []],
        )
        return _result(summary, suggestion, "ai")

    except Exception as e:
        logger.warning(f"AI layout analysis failed, using rule-based review: {e}")
        return _fallback_analysis(summary, error=str(e))


# ============================================================================
# FALLBACK: rule-based when no API is available
# ============================================================================

def _fallback_analysis(summary: dict, error: Optional[str] = None) -> dict:
    """Rule-based layout review fallback."""
    total = summary["total_area"]
    usable = summary["usable_area"]
    booths = summary["booths"]
    intruded = [b for b in booths if b["has_pillar_intrusion"]]

    if total > 0:
        efficiency = usable / total * 100
        analysis = (
            f"Rule-based review (AI unavailable): {len(booths)} booths, "
            f"{total:.2f} m² gross, {usable:.2f} m² usable ({efficiency:.1f}% efficiency)."
        )
    else:
        analysis = "Rule-based review (AI unavailable): the layout has no booths yet."

    suggestions = []
    for b in intruded:
        name = b["label"] or b["id"]
        lost = b["gross_area_m2"] - b["usable_area_m2"]
        suggestions.append(
            f"{name}: pillars take {lost:.2f} m²; move the booth or price it by usable area"
        )
    if not intruded and booths:
        suggestions.append("No booth overlaps a pillar.")
    if not AI_API_KEY:
        suggestions.append("Set AI_API_KEY for an AI-written review")

    return _result(summary, _format_suggestion(analysis, suggestions), "fallback", error)
