#!/usr/bin/env python3
"""
Podcast Diarizer CLI
--------------------
Command-line interface: transcribe an audio file (or reuse transcription.txt),
then write a speaker-labeled version to diarized.txt.
"""
import sys
import argparse
import logging
from typing import List, Optional

from podcast_diarizer.config import Settings, load_api_key
from podcast_diarizer.diarization.chat_diarizer import ChatCompletionDiarizer
from podcast_diarizer.exceptions import DiarizerError
from podcast_diarizer.pipeline.transcript_pipeline import TranscriptPipeline
from podcast_diarizer.transcription.whisper import WhisperTranscriptionService

logger = logging.getLogger(__name__)


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that exits with status 1 on invalid input"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="podcast-diarizer",
        description="Transcribe an audio file and label each segment with its speaker",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "-audio", "--audio",
        help="Path to the audio file"
    )
    parser.add_argument(
        "-speakers", "--speakers",
        type=int,
        default=2,
        help="Number of speakers in the podcast"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not args.audio:
        parser.print_usage(sys.stderr)
        logger.error("Please provide the path to the audio file using -audio")
        return 1

    settings = Settings()
    try:
        api_key = load_api_key()
        pipeline = TranscriptPipeline(
            settings,
            transcriber=WhisperTranscriptionService(settings, api_key),
            diarizer=ChatCompletionDiarizer(settings, api_key)
        )
        result = pipeline.process_audio(args.audio, num_speakers=args.speakers)
    except DiarizerError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    logger.info(f"Done: {result.diarized_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
