"""Text and JSON rendering of verdicts and video analyses."""
from typing import Any, Dict, List

from .judge import to_percent
from .types import FrameResult, Verdict, VideoAnalysis, VideoSummary, VideoVerdict

FRAME_DEFAULT_EXPLANATIONS = {
    VideoVerdict.AI_GENERATED:
        "This frame shows strong indicators of being generated by AI (probability: {p}%).",
    VideoVerdict.POSSIBLY_MANIPULATED:
        "This frame shows some indicators of manipulation or AI generation (probability: {p}%).",
    VideoVerdict.LIKELY_AUTHENTIC:
        "This frame appears to be authentic (probability: {p}%).",
}


def banner_text(verdict: Verdict) -> str:
    """One-line headline for an image verdict."""
    p = verdict.ai_probability
    if p > 70:
        return f"AI-GENERATED - {p}% likely"
    if p > 30:
        return f"Possibly Manipulated - {p}% likely"
    return f"Likely Authentic - {100 - p}% confident"


def binary_label(verdict: Verdict) -> str:
    return "AI-GENERATED" if verdict.ai_probability > 50 else "AUTHENTIC"


def format_timestamp(seconds: float) -> str:
    """Format seconds as MM:SS."""
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes:02d}:{secs:02d}"


def frame_detail(frame: FrameResult) -> str:
    label = frame.label
    explanation = frame.explanation or FRAME_DEFAULT_EXPLANATIONS[label].format(p=frame.ai_probability)
    return f"[{format_timestamp(frame.time_point)}] {label.value}: {explanation}"


def summary_lines(summary: VideoSummary) -> List[str]:
    return [
        f"Overall verdict: {summary.verdict.value} "
        f"({to_percent(summary.overall_ratio / 100)}% of frames highly suspicious)",
        f"Total frames analyzed: {summary.total_frames}",
        f"AI-generated frames: {summary.ai_frames} ({summary.ai_percentage}%)",
        f"Suspicious frames: {summary.suspicious_frames} ({summary.suspicious_percentage}%)",
    ]


def verdict_to_dict(verdict: Verdict) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "ai_probability": verdict.ai_probability,
        "confidence": verdict.confidence,
        "explanation": verdict.explanation,
        "verdict": binary_label(verdict),
    }
    if verdict.details is not None:
        result["details"] = {
            "color_distribution": verdict.details.color_distribution,
            "edge_patterns": verdict.details.edge_patterns,
            "facial_anomalies": verdict.details.facial_anomalies,
            "texture_inconsistencies": verdict.details.texture_inconsistencies,
            "average": verdict.details.average,
        }
    if verdict.error is not None:
        result["error"] = verdict.error
    return result


def frame_to_dict(frame: FrameResult) -> Dict[str, Any]:
    return {
        "time_point": frame.time_point,
        "ai_probability": frame.ai_probability,
        "explanation": frame.explanation,
    }


def analysis_to_dict(analysis: VideoAnalysis) -> Dict[str, Any]:
    summary = analysis.summary
    return {
        "duration": analysis.duration,
        "cancelled": analysis.cancelled,
        "summary": {
            "verdict": summary.verdict.value,
            "total_frames": summary.total_frames,
            "ai_frames": summary.ai_frames,
            "suspicious_frames": summary.suspicious_frames,
            "ai_percentage": summary.ai_percentage,
            "suspicious_percentage": summary.suspicious_percentage,
            "overall_ratio": summary.overall_ratio,
            "highlighted": frame_to_dict(summary.highlighted) if summary.highlighted else None,
        },
        "frames": [
            dict(frame_to_dict(frame), position=round(position, 2))
            for position, frame in analysis.timeline()
        ],
    }
