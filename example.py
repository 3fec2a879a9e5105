"""
End-to-end SDK example: generate an image, upscale it, animate it.

Run with an API key in the environment:
    STABILITY_AI_API_KEY=sk-... python example.py
"""
import asyncio
import logging
import time

import stabilityai
from stabilityai import (
    DEFAULT_POLL_INTERVAL,
    ContentModerationError,
    ContentResult,
    StabilityAI,
)

# ── logging ──────────────────────────────────────────────────────────────────
# The SDK emits logs under the "stabilityai" logger.
# We configure a basic handler here so they print to stdout.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    datefmt="%H:%M:%S",
)
# Uncomment to see every HTTP request/response:
# logging.getLogger("stabilityai").setLevel(logging.DEBUG)

# Give up on a job after this many seconds; the SDK itself never times out.
JOB_DEADLINE = 600


async def wait_for(fetch, job_id):
    """Poll *fetch* until the job finishes or JOB_DEADLINE passes."""
    deadline = time.monotonic() + JOB_DEADLINE
    while True:
        result = await fetch(job_id)
        if isinstance(result, ContentResult):
            return result
        if time.monotonic() >= deadline:
            raise SystemExit(f"      ✗ job {job_id!r} still {result.status!r} after {JOB_DEADLINE}s")
        await asyncio.sleep(DEFAULT_POLL_INTERVAL)


async def main():
    print(f"\nstabilityai SDK v{stabilityai.__version__}")
    print("=" * 60)

    async with StabilityAI(client_id="stabilityai-example") as client:

        # ── step 1 · balance ─────────────────────────────────────────────────
        print("\n[1/4] Checking credit balance…")
        credits = await client.v1.user.balance()
        print(f"      → {credits:.2f} credits")

        # ── step 2 · generate ────────────────────────────────────────────────
        print("\n[2/4] Generating an image (core)…")
        try:
            image = await client.v2beta.stable_image.generate.core(
                "a lighthouse on a cliff at dusk, oil painting",
                aspect_ratio="3:2",
            )
        except ContentModerationError as e:
            print(f"      ✗ Prompt rejected: {e}")
            raise SystemExit(1)
        print(f"      → {image.filepath}  seed={image.seed}")
        if image.content_filtered:
            print("      ! output was filtered by moderation")

        # ── step 3 · creative upscale (job) ─────────────────────────────────
        print("\n[3/4] Starting creative upscale…")
        job = await client.v2beta.stable_image.upscale.start_creative(image.filepath, "UHD 4k")
        print(f"      → job.id = {job.id!r}, polling every {DEFAULT_POLL_INTERVAL}s")

        upscaled = await wait_for(
            lambda job_id: client.v2beta.stable_image.upscale.fetch_creative_result(
                job_id, job.output_format
            ),
            job.id,
        )
        print(f"      → {upscaled.filepath}")

        # ── step 4 · image to video (job) ───────────────────────────────────
        print("\n[4/4] Animating the image…")
        job = await client.v2beta.stable_video.image_to_video(image.filepath)
        video = await wait_for(client.v2beta.stable_video.image_to_video_result, job.id)
        print(f"      → {video.filepath}")

    print("\n" + "=" * 60)
    print("Done.")


if __name__ == "__main__":
    asyncio.run(main())
