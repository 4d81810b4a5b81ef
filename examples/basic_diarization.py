#!/usr/bin/env python3
"""
Basic Podcast Diarizer Example
------------------------------
Demonstrates how to use the pipeline from Python to diarize an audio file.
"""
import logging
from pathlib import Path

from podcast_diarizer import Settings, TranscriptPipeline
from podcast_diarizer.config import load_api_key
from podcast_diarizer.diarization import ChatCompletionDiarizer
from podcast_diarizer.exceptions import DiarizerError
from podcast_diarizer.transcription import WhisperTranscriptionService

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def main():
    """Diarize an audio file with the Podcast Diarizer pipeline"""
    # Path to your audio file
    audio_path = "path/to/your/audio/file.mp3"

    # Check if the audio file exists
    if not Path(audio_path).exists():
        logger.error(f"Audio file not found: {audio_path}")
        logger.error("Please update the audio_path variable to a valid audio file path")
        return

    try:
        api_key = load_api_key()
    except DiarizerError as e:
        logger.error(str(e))
        return

    # Shorter diarization budget than the default two minutes
    settings = Settings(diarization_timeout=60.0)

    pipeline = TranscriptPipeline(
        settings,
        transcriber=WhisperTranscriptionService(settings, api_key),
        diarizer=ChatCompletionDiarizer(settings, api_key),
        work_dir=Path(audio_path).parent
    )

    result = pipeline.process_audio(audio_path, num_speakers=3)

    # Print results
    print("Processing complete!")
    print(f"Transcript {'loaded from cache' if result.from_cache else 'freshly transcribed'}")
    print(f"Diarized transcript saved to: {result.diarized_path}")

if __name__ == "__main__":
    main()
