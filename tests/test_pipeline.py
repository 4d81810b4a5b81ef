#!/usr/bin/env python3
"""
Tests for the transcript pipeline: caching and persistence
"""
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

# Add the src directory to the path to import the package
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from podcast_diarizer.config import Settings
from podcast_diarizer.diarization.chat_diarizer import ChatCompletionDiarizer
from podcast_diarizer.exceptions import FileAccessError, NetworkError, UpstreamError
from podcast_diarizer.pipeline.transcript_pipeline import TranscriptPipeline
from podcast_diarizer.transcription.whisper import WhisperTranscriptionService


class TestPipeline(unittest.TestCase):
    """Test the transcribe-then-diarize pipeline with mocked services"""

    def setUp(self):
        """Set up test environment"""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.work_dir = Path(self.temp_dir.name)
        self.audio_path = self.work_dir / "episode.mp3"
        self.audio_path.write_bytes(b"audio")

        self.transcriber = MagicMock(spec=WhisperTranscriptionService)
        self.transcriber.transcribe.return_value = "hello world"
        self.diarizer = MagicMock(spec=ChatCompletionDiarizer)
        self.diarizer.diarize.return_value = "Speaker 1: hello world"

        self.pipeline = TranscriptPipeline(
            Settings(),
            transcriber=self.transcriber,
            diarizer=self.diarizer,
            work_dir=self.work_dir
        )
        self.cache_path = self.work_dir / "transcription.txt"
        self.output_path = self.work_dir / "diarized.txt"

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_fresh_run_writes_cache_and_output(self):
        result = self.pipeline.process_audio(self.audio_path, num_speakers=2)

        self.transcriber.transcribe.assert_called_once_with(self.audio_path)
        self.diarizer.diarize.assert_called_once_with("hello world", 2)
        self.assertFalse(result.from_cache)
        self.assertEqual(self.cache_path.read_text(encoding="utf-8"), "hello world")
        self.assertEqual(
            self.output_path.read_bytes(),
            b"=== Diarized Transcript ===\nSpeaker 1: hello world\n"
        )
        self.assertEqual(result.diarized_path, self.output_path)

    def test_cached_transcript_skips_transcription(self):
        cached = "cached text\r\nwith a windows line ending"
        self.cache_path.write_bytes(cached.encode("utf-8"))

        result = self.pipeline.process_audio(self.audio_path, num_speakers=3)

        self.transcriber.transcribe.assert_not_called()
        self.diarizer.diarize.assert_called_once_with(cached, 3)
        self.assertTrue(result.from_cache)
        self.assertEqual(result.transcript, cached)

    def test_second_run_uses_cache(self):
        self.pipeline.process_audio(self.audio_path)
        self.pipeline.process_audio(self.audio_path)

        self.transcriber.transcribe.assert_called_once()
        self.assertEqual(self.diarizer.diarize.call_count, 2)

    def test_cache_not_tied_to_audio_file(self):
        self.cache_path.write_text("another episode", encoding="utf-8")

        result = self.pipeline.process_audio(self.work_dir / "does-not-exist.mp3")

        self.assertEqual(result.transcript, "another episode")

    def test_diarization_failure_keeps_cache(self):
        self.diarizer.diarize.side_effect = UpstreamError("chat completion", 429, "slow down")

        with self.assertRaises(UpstreamError):
            self.pipeline.process_audio(self.audio_path)

        self.assertEqual(self.cache_path.read_text(encoding="utf-8"), "hello world")
        self.assertFalse(self.output_path.exists())

    def test_diarization_failure_leaves_previous_output(self):
        self.output_path.write_text("=== Diarized Transcript ===\nold\n", encoding="utf-8")
        self.diarizer.diarize.side_effect = NetworkError("chat completion request timed out")

        with self.assertRaises(NetworkError):
            self.pipeline.process_audio(self.audio_path)

        self.assertEqual(self.output_path.read_text(encoding="utf-8"), "=== Diarized Transcript ===\nold\n")

    def test_transcription_failure_writes_nothing(self):
        self.transcriber.transcribe.side_effect = NetworkError("failed to send transcription request")

        with self.assertRaises(NetworkError):
            self.pipeline.process_audio(self.audio_path)

        self.assertFalse(self.cache_path.exists())
        self.diarizer.diarize.assert_not_called()

    def test_unwritable_output(self):
        self.output_path.mkdir()

        with self.assertRaises(FileAccessError) as cm:
            self.pipeline.process_audio(self.audio_path)

        self.assertIn("Error writing diarized transcript to file", str(cm.exception))


if __name__ == "__main__":
    unittest.main()
