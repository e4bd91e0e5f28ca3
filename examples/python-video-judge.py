import asyncio
import sys
from pathlib import Path

from artifactjudge import (
    AnalysisOptions,
    CancellationToken,
    ImageJudge,
    ThumbnailFeatureExtractor,
    VideoAggregator,
    load_image,
)
from artifactjudge.report import banner_text, frame_detail, summary_lines


async def run(base_dir: Path):
    options = AnalysisOptions(sample_interval=1.0, seed=42)
    judge = ImageJudge(extractor=ThumbnailFeatureExtractor(), options=options)

    for name in ("aigen.jpg", "og.jpg", "sample-pattern.jpg"):
        path = base_dir / "test-data" / name
        verdict = await judge.judge(load_image(path), path.name)
        print(f"{name}: {banner_text(verdict)} ({verdict.explanation})")

    video_path = base_dir / "test-data" / "sample-clip.mp4"
    aggregator = VideoAggregator(judge)
    analysis = await aggregator.analyze_file(video_path, cancel_token=CancellationToken())

    print("\n[Video]")
    for line in summary_lines(analysis.summary):
        print(line)
    for _, frame in analysis.timeline():
        print(f"  {frame_detail(frame)}")


def main():
    print("--- Judging sample media (Python) ---")

    base_dir = Path(__file__).parent.parent
    if not (base_dir / "test-data").exists():
        print("Test data not found! Run scripts/generate-test-data.py first.")
        sys.exit(1)

    asyncio.run(run(base_dir))


if __name__ == "__main__":
    main()
