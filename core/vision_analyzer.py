"""
Vision Label Analyzer

Sends the label image plus the fixed instruction prompt to the vision model
and returns whatever text comes back. No parsing happens here; see
analysis.extractor for that.
"""

import base64
import logging
from typing import Tuple, Union

import config
from analysis.errors import UpstreamFailure
from core.llm_client import build_client, classify_error
from core.prompt import LABEL_ANALYSIS_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"


def split_data_uri(image: str) -> Tuple[str, str]:
    """
    Strip an optional data-URI prefix from a base64 image.

    'data:image/png;base64,iVBOR...' -> ('iVBOR...', 'image/png')
    'iVBOR...'                       -> ('iVBOR...', 'image/jpeg')
    """
    if "base64," not in image:
        return image.strip(), DEFAULT_MIME_TYPE

    header, b64_data = image.split(",", 1)
    mime_type = DEFAULT_MIME_TYPE
    if header.startswith("data:"):
        mime_type = header[len("data:"):].split(";")[0] or DEFAULT_MIME_TYPE
    return b64_data.strip(), mime_type


class VisionLabelAnalyzer:
    """Single opaque call to the vision model for one label image."""

    def __init__(self, client=None, model: str = None):
        self.model = model or config.VISION_MODEL
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = build_client()
        return self._client

    def build_messages(self, b64_data: str, mime_type: str):
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": LABEL_ANALYSIS_PROMPT},
                    {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{b64_data}"}},
                ],
            }
        ]

    def analyze(self, image: Union[str, bytes], mime_type: str = None) -> str:
        """
        Run the vision model on one image.

        Args:
            image: raw bytes, base64 text, or a base64 data URI
            mime_type: overrides the type found in the data URI

        Returns:
            Raw model text (untrusted, may not be JSON)

        Raises:
            UpstreamFailure: the call did not complete or returned nothing
        """
        if isinstance(image, (bytes, bytearray)):
            b64_data, detected = base64.b64encode(image).decode("utf-8"), DEFAULT_MIME_TYPE
        else:
            b64_data, detected = split_data_uri(image)
        mime_type = mime_type or detected

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(b64_data, mime_type),
                temperature=config.VISION_TEMPERATURE,
                max_tokens=config.VISION_MAX_TOKENS,
            )
        except Exception as e:
            failure = classify_error(e)
            logger.error("Vision call failed (%s): %s", failure.kind, e)
            raise failure from e

        text = response.choices[0].message.content if response.choices else None
        if not text:
            raise UpstreamFailure("Vision model returned an empty response")

        logger.debug("Vision model returned %d chars", len(text))
        return text
