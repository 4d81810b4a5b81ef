from podcast_diarizer.pipeline.transcript_pipeline import PipelineResult, TranscriptPipeline

__all__ = ["PipelineResult", "TranscriptPipeline"]
