import logging
from typing import Union

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

import config
from analysis.errors import ExtractionFailure, LabelAnalysisError, SchemaViolation, UpstreamFailure
from analysis.models import AnalysisRecord
from api.models import AnalyzeRequest, ErrorResponse
from core.pipeline import analyze_label
from core.vision_analyzer import VisionLabelAnalyzer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])

NO_IMAGE_MESSAGE = "No image provided"
CONFIGURATION_MESSAGE = "Vision model unavailable. Check API key and model configuration."
UPSTREAM_MESSAGE = "Failed to process visual data. Ensure image clarity."
UNREADABLE_MESSAGE = "Could not read a structured analysis from the model response."
TOO_LARGE_MESSAGE = "Image is too large."

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def get_analyzer() -> VisionLabelAnalyzer:
    return VisionLabelAnalyzer()


def _error(status_code: int, message: str, details: str = None) -> JSONResponse:
    body = ErrorResponse(error=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _run_analysis(image: Union[str, bytes], analyzer: VisionLabelAnalyzer, mime_type: str = None):
    try:
        return analyze_label(image, analyzer=analyzer, mime_type=mime_type)
    except UpstreamFailure as e:
        if e.is_configuration:
            return _error(503, CONFIGURATION_MESSAGE, str(e))
        return _error(502, UPSTREAM_MESSAGE, str(e))
    except SchemaViolation as e:
        return _error(422, UNREADABLE_MESSAGE, f"Schema violation at {e.path}: {e.reason}")
    except ExtractionFailure as e:
        logger.warning("Extraction failed: %s", e)
        return _error(422, UNREADABLE_MESSAGE, str(e))
    except LabelAnalysisError as e:
        logger.error("Label analysis failed: %s", e)
        return _error(502, UPSTREAM_MESSAGE, str(e))


@router.post("/api/analyze", response_model=AnalysisRecord, responses=ERROR_RESPONSES)
def analyze(data: AnalyzeRequest, analyzer: VisionLabelAnalyzer = Depends(get_analyzer)):
    """Analyze a base64 label image (optionally a data URI)."""
    if not data.image:
        return _error(400, NO_IMAGE_MESSAGE)
    return _run_analysis(data.image, analyzer)


@router.post("/api/analyze/upload", response_model=AnalysisRecord, responses=ERROR_RESPONSES)
def analyze_upload(
    file: UploadFile = File(...),
    analyzer: VisionLabelAnalyzer = Depends(get_analyzer),
):
    """Analyze an uploaded label image file."""
    content = file.file.read(config.MAX_UPLOAD_BYTES + 1)
    if not content:
        return _error(400, NO_IMAGE_MESSAGE)
    if len(content) > config.MAX_UPLOAD_BYTES:
        return _error(413, TOO_LARGE_MESSAGE, f"limit is {config.MAX_UPLOAD_BYTES} bytes")

    mime_type = None
    if file.content_type and file.content_type.startswith("image/"):
        mime_type = file.content_type
    return _run_analysis(content, analyzer, mime_type=mime_type)
