"""Scene analysis orchestration pipeline.

Turns a photo into a validated Scene using Gemini Vision:
1. Ask the model for Scene JSON (image + system instruction)
2. Extract the JSON payload from the raw text
3. Validate structure, per-type caps and id uniqueness
4. On any failure, make exactly one repair request listing every error
5. If the repair also fails, return the static fallback Scene

analyze_image() never raises; every path ends in a VisionResult whose
`source` records which branch produced the Scene.
"""

import asyncio
import logging
import time
from typing import Any, List, Optional, Sequence

from google.genai import types

from exceptions import SceneGenError, TransportError
from scenes.extract_json import parse_json_payload
from scenes.fallback import FALLBACK_SCENE
from scenes.models import ParseResult, Provenance, Scene, StageDiagnostic, VisionResult
from scenes.prompts import SYSTEM_PROMPT, build_repair_prompt, build_user_prompt
from scenes.validate import validate_scene
from util.gemini import (
    GeminiAPI,
    generate_content_async,
    image_part,
    model_turn,
    response_text,
    user_turn,
)

logger = logging.getLogger(__name__)

FIRST_TEMPERATURE = 0.4
REPAIR_TEMPERATURE = 0.2  # lower for a more literal correction
MAX_OUTPUT_TOKENS = 4096


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _generation_config(temperature: float) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        system_instruction=SYSTEM_PROMPT,
        temperature=temperature,
        max_output_tokens=MAX_OUTPUT_TOKENS,
        response_mime_type="application/json",
    )


class _StageRecorder:
    """Collects StageDiagnostic records and mirrors them to the log."""

    def __init__(self):
        self.records: List[StageDiagnostic] = []

    def record(
        self,
        stage: str,
        start: float,
        provenance: Optional[Provenance] = None,
        errors: Sequence[str] = ()
    ) -> StageDiagnostic:
        diagnostic = StageDiagnostic(
            stage=stage,
            duration_ms=_elapsed_ms(start),
            provenance=provenance,
            errors=tuple(errors),
        )
        self.records.append(diagnostic)

        summary = f"stage={stage} duration={diagnostic.duration_ms}ms"
        if provenance:
            summary += f" source={provenance}"
        if errors:
            logger.warning(f"{summary} errors={len(errors)}: {list(errors)}")
        else:
            logger.info(summary)
        return diagnostic


async def _call_model(api: GeminiAPI, contents: List[Any], temperature: float) -> str:
    """
    Run one model call and return its raw text.

    Raises:
        TransportError: For any failure of the call itself
    """
    try:
        response = await generate_content_async(api, contents, _generation_config(temperature))
        return response_text(response)
    except TransportError:
        raise
    except Exception as e:
        raise TransportError(f"Model call failed: {e}") from e


def _evaluate(raw_text: str) -> ParseResult:
    """Extract and validate a raw model response; never raises."""
    try:
        payload = parse_json_payload(raw_text)
        return validate_scene(payload)
    except SceneGenError as e:
        return ParseResult(errors=(str(e),))
    except RecursionError:
        return ParseResult(errors=("Model response was nested too deeply to validate",))


async def analyze_image(
    image_bytes: bytes,
    mime_type: str = "image/jpeg",
    width: int = 1024,
    height: int = 768,
    api: Optional[GeminiAPI] = None
) -> VisionResult:
    """
    Analyze a photo and return a validated Scene.

    Flow:
        model call -> extract -> validate -> [ok: "ai"]
                                          -> repair call -> extract -> validate -> [ok: "ai_repaired"]
                                                                                -> fallback
        Transport failure or cancellation on the first call skips the repair.

    Cancellation of an in-flight model call is converted into a fallback
    result rather than re-raised, so the caller always gets a Scene back.
    Callers that rely on asyncio.timeout() or a TaskGroup to observe
    CancelledError should check `source == "fallback"` instead.

    Args:
        image_bytes: Encoded image (already resized/compressed by the caller)
        mime_type: MIME type of image_bytes
        width: Source image width in pixels (told to the model)
        height: Source image height in pixels
        api: Optional GeminiAPI instance (creates new one if not provided)

    Returns:
        VisionResult with the Scene, its provenance, total duration and
        per-stage diagnostics

    Example:
        result = await analyze_image(jpeg_bytes, "image/jpeg", 1024, 768)
        print(result.source, result.duration_ms)
    """
    started = time.monotonic()
    stages = _StageRecorder()

    def finish(scene: Scene, source: Provenance) -> VisionResult:
        stages.record("done", started, provenance=source)
        return VisionResult(
            scene=scene,
            source=source,
            duration_ms=_elapsed_ms(started),
            diagnostics=tuple(stages.records),
        )

    def fallback(stage: str, stage_start: float, errors: Sequence[str]) -> VisionResult:
        stages.record(stage, stage_start, provenance="fallback", errors=errors)
        logger.warning("Returning fallback scene")
        return finish(FALLBACK_SCENE, "fallback")

    stage_start = time.monotonic()
    try:
        if api is None:
            api = GeminiAPI()
        request_turn = user_turn([image_part(image_bytes, mime_type), build_user_prompt(width, height)])
    except Exception as e:
        logger.error(f"Could not prepare scene request: {e}")
        return fallback("setup", stage_start, [str(e)])

    # First attempt
    try:
        raw_text = await _call_model(api, [request_turn], FIRST_TEMPERATURE)
    except TransportError as e:
        logger.error(f"Vision model error: {e}")
        return fallback("model_call", stage_start, [str(e)])
    except asyncio.CancelledError:
        # Converted to a fallback result, not re-raised
        logger.warning("Scene analysis cancelled during model call")
        return fallback("model_call", stage_start, ["cancelled"])

    stages.record("model_call", stage_start)
    logger.debug(f"Raw AI response ({len(raw_text)} chars): {raw_text[:500]}")

    stage_start = time.monotonic()
    first = _evaluate(raw_text)
    if first.ok:
        stages.record("validation", stage_start, provenance="ai")
        return finish(first.scene, "ai")
    stages.record("validation", stage_start, errors=first.errors)

    # Repair attempt: replay the conversation and list every error
    stage_start = time.monotonic()
    repair_contents = [
        request_turn,
        model_turn(raw_text or "(empty response)"),
        user_turn([build_repair_prompt(first.errors)]),
    ]
    try:
        repair_text = await _call_model(api, repair_contents, REPAIR_TEMPERATURE)
    except TransportError as e:
        logger.error(f"Repair attempt error: {e}")
        return fallback("repair_call", stage_start, [str(e)])
    except asyncio.CancelledError:
        logger.warning("Scene analysis cancelled during repair call")
        return fallback("repair_call", stage_start, ["cancelled"])

    stages.record("repair_call", stage_start)

    stage_start = time.monotonic()
    repaired = _evaluate(repair_text)
    if repaired.ok:
        stages.record("repair_validation", stage_start, provenance="ai_repaired")
        return finish(repaired.scene, "ai_repaired")

    return fallback("repair_validation", stage_start, repaired.errors)


def analyze_image_sync(
    image_bytes: bytes,
    mime_type: str = "image/jpeg",
    width: int = 1024,
    height: int = 768,
    api: Optional[GeminiAPI] = None
) -> VisionResult:
    """
    Synchronous wrapper for analyze_image().

    Example:
        result = analyze_image_sync(Path("desk.jpg").read_bytes(), "image/jpeg", 1024, 768)
    """
    return asyncio.run(analyze_image(image_bytes, mime_type, width, height, api=api))
