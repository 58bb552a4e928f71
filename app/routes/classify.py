"""
Classification endpoint - label a comment with a civic theme.

Stateless: validates the body, calls the ThemeClassifier, returns {theme}.
Validation runs before any model call; the order of checks is part of
the API contract.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from app.models.comment import COMMENT_MAX_LENGTH, ClassifyResponse, ErrorResponse
from app.services.classifier import ThemeClassifier
import json
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Classification"])


INVALID_JSON = "Invalid JSON body."
MISSING_FIELD = 'Request body must include a "comment_text" string field.'
EMPTY_COMMENT = '"comment_text" must not be empty.'
COMMENT_TOO_LONG = f'"comment_text" must be {COMMENT_MAX_LENGTH} characters or fewer.'
CLASSIFICATION_FAILED = "Classification failed. Please try again."


def get_theme_classifier(request: Request) -> ThemeClassifier:
    """Dependency: the classifier built at startup."""
    classifier = getattr(request.app.state, "theme_classifier", None)
    if classifier is None:
        raise RuntimeError("Theme classifier not initialized")
    return classifier


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/classify",
    response_model=ClassifyResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def classify_comment(request: Request, classifier: ThemeClassifier = Depends(get_theme_classifier)):
    """
    Classify a comment.

    Responses:
    - 400 malformed JSON
    - 422 missing/non-string field, empty text, text over 2000 characters
    - 502 model unavailable (details are only logged)
    - 200 {"theme": <label>}
    """
    raw_body = await request.body()
    try:
        body = json.loads(raw_body)
    except ValueError:
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_JSON)

    if not isinstance(body, dict) or not isinstance(body.get("comment_text"), str):
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, MISSING_FIELD)

    comment_text = body["comment_text"].strip()

    if not comment_text:
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, EMPTY_COMMENT)

    if len(comment_text) > COMMENT_MAX_LENGTH:
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, COMMENT_TOO_LONG)

    try:
        theme = await run_in_threadpool(classifier.classify, comment_text)
    except Exception as e:
        logger.error(f"❌ POST /api/classify - Classification failed: {e}", exc_info=True)
        return _error(status.HTTP_502_BAD_GATEWAY, CLASSIFICATION_FAILED)

    logger.info(f"✅ Classified comment as {theme.value}")
    return ClassifyResponse(theme=theme)
