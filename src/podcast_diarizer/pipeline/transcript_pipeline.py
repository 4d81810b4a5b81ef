#!/usr/bin/env python3
"""
Transcript Pipeline
-------------------
Runs transcription and diarization in sequence and persists both results.

The raw transcript is cached in the working directory. When the cache file
exists it is used as-is and no transcription request is made; the cache is
never checked against the audio file, so delete it to force a new
transcription.
"""
import time
import logging
from pathlib import Path
from typing import Optional, Union
from dataclasses import dataclass

from podcast_diarizer.config import Settings
from podcast_diarizer.diarization.chat_diarizer import ChatCompletionDiarizer
from podcast_diarizer.exceptions import FileAccessError
from podcast_diarizer.transcription.whisper import WhisperTranscriptionService

logger = logging.getLogger(__name__)

DIARIZED_HEADER = "=== Diarized Transcript ==="


@dataclass
class PipelineResult:
    """Outcome of one pipeline run"""
    transcript: str
    diarized_transcript: str
    from_cache: bool
    transcription_path: Path
    diarized_path: Path


def format_diarized(diarized_transcript: str) -> str:
    return f"{DIARIZED_HEADER}\n{diarized_transcript}\n"


class TranscriptPipeline:
    """Cache-aware transcription followed by diarization"""

    def __init__(
        self,
        settings: Settings,
        transcriber: WhisperTranscriptionService,
        diarizer: ChatCompletionDiarizer,
        work_dir: Optional[Union[str, Path]] = None
    ):
        """
        Initialize the pipeline

        Args:
            settings: Shared settings (file names)
            transcriber: Transcription service
            diarizer: Diarization service
            work_dir: Directory holding the cache and output files (default: current directory)
        """
        self.settings = settings
        self.transcriber = transcriber
        self.diarizer = diarizer
        self.work_dir = Path(work_dir) if work_dir else Path(".")

    @property
    def transcription_path(self) -> Path:
        return self.work_dir / self.settings.transcription_file

    @property
    def diarized_path(self) -> Path:
        return self.work_dir / self.settings.diarized_file

    def process_audio(self, audio_path: Union[str, Path], num_speakers: int = 2) -> PipelineResult:
        """
        Transcribe (or load the cached transcript) and diarize

        Args:
            audio_path: Path to the audio file; unused when the cache exists
            num_speakers: Speaker count hint for diarization

        Returns:
            PipelineResult with both texts and output paths

        Raises:
            DiarizerError: From any step. A transcript written to the cache
                before a later failure stays on disk.
        """
        start_time = time.time()

        from_cache = self.transcription_path.exists()
        if from_cache:
            transcript = self._read_text(self.transcription_path)
            logger.info(f"Loaded transcription from {self.transcription_path}")
        else:
            logger.info(f"Starting transcription for: {audio_path}")
            transcript = self.transcriber.transcribe(audio_path)
            self._write_text(self.transcription_path, transcript, "transcription")
            logger.info(f"Transcription saved to {self.transcription_path}")

        logger.info(f"Starting diarization with {num_speakers} speakers")
        diarized_transcript = self.diarizer.diarize(transcript, num_speakers)
        self._write_text(self.diarized_path, format_diarized(diarized_transcript), "diarized transcript")
        logger.info(f"Diarized transcript saved to {self.diarized_path}")

        logger.info(f"Pipeline finished in {time.time() - start_time:.2f}s")
        return PipelineResult(
            transcript=transcript,
            diarized_transcript=diarized_transcript,
            from_cache=from_cache,
            transcription_path=self.transcription_path,
            diarized_path=self.diarized_path
        )

    def _read_text(self, path: Path) -> str:
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(f"Error reading {path}", e) from e

    def _write_text(self, path: Path, text: str, what: str) -> None:
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(text)
        except OSError as e:
            raise FileAccessError(f"Error writing {what} to file", e) from e
