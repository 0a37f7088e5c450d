"""Offline transcription client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseTranscriptionClient and register the provider in TranscriberFactory.
"""

import json
from typing import ClassVar

from mathdigitizer.ingest.models import SourceImage
from mathdigitizer.transcription.client_base import BaseTranscriptionClient


class ExampleClientAdapter(BaseTranscriptionClient):
    """Returns a fixed transcript with one figure covering the first image.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "latex": "Question 1. Given the graph of $y = f(x)$ below.\n[[FIG_0]]\n"
        "A. $1$ B. $2$ C. $3$ D. $4$",
        "html": "<p>Question 1. Given the graph of <i>y = f(x)</i> below.</p>"
        "<p>[[FIG_0]]</p><p>A. 1 B. 2 C. 3 D. 4</p>",
        "figures": [{"id": "FIG_0", "source_index": 0, "box_2d": [100, 100, 400, 400]}],
    }

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        images: list[SourceImage],
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, json_schema
        if not images:
            return json.dumps({"latex": "", "html": "", "figures": []})
        return json.dumps(self.DEFAULT_RESPONSE)
