"""Transcription-related data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict


@dataclass
class TranscriptionRequest:
    """One request to the generative model. Built per attempt, then discarded."""
    data: str  # Base64-encoded file content
    mime_type: str
    prompt: str
    model: str

    def to_payload(self) -> Dict[str, Any]:
        """Render the generateContent JSON body with the payload inlined."""
        return {
            "contents": [
                {
                    "parts": [
                        {
                            "inline_data": {
                                "mime_type": self.mime_type,
                                "data": self.data,
                            }
                        },
                        {"text": self.prompt},
                    ]
                }
            ]
        }


@dataclass
class TranscriptionResult:
    """Result of a transcription operation."""
    text: str
    model: str
    processing_time: float
    file_name: str
    timestamp: datetime = field(default_factory=datetime.now)
