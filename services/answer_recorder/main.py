"""
Answer Recorder.

Records one spoken answer from the microphone, sends it to the feedback
proxy for transcription and prints the structured critique.
"""

import argparse
import asyncio
import sys

from ddtrace import patch_all
from interview_common.logging import setup_logging

from answer_recorder.config import load_config
from answer_recorder.dependencies import build_controller, get_http_client
from answer_recorder.domain import (
    DurationLimitReached,
    ElapsedTick,
    PipelineEvent,
    PipelineState,
    RetryScheduled,
    StateChanged,
)

patch_all()

logger = setup_logging()

DEFAULT_QUESTION = "Tell me about a time you had to make a decision with incomplete data."


def _print_event(event: PipelineEvent) -> None:
    if isinstance(event, ElapsedTick):
        print(f"\rRecording... {event.elapsed_seconds}s", end="", flush=True)
    elif isinstance(event, DurationLimitReached):
        print(f"\nRecording limit of {event.elapsed_seconds}s reached, press Enter to continue.")
    elif isinstance(event, RetryScheduled):
        print(
            f"\nTranscription attempt {event.attempt.attempt_number} failed, "
            f"retrying in {event.attempt.next_delay_ms / 1000:g}s"
        )
    elif isinstance(event, StateChanged) and event.current is not PipelineState.RECORDING:
        print(f"\n[{event.current.value}]")


async def run(question: str, profile: str | None) -> int:
    config = load_config()
    loop = asyncio.get_running_loop()

    async with get_http_client(config) as http_client:
        controller = build_controller(config, http_client)
        controller.subscribe(_print_event)

        print(f"Question: {question}")
        await loop.run_in_executor(None, input, "Press Enter to start recording.")
        await controller.start()
        if controller.state is PipelineState.RECORDING:
            await loop.run_in_executor(None, input, "Press Enter to stop.\n")
            await controller.stop()

        snapshot = await controller.join()
        try:
            if snapshot.state is PipelineState.READY_FOR_FEEDBACK:
                print(f"\nTranscript:\n{snapshot.transcript.text}\n")
                await controller.request_feedback(question, profile)
                snapshot = await controller.join()
        finally:
            await controller.shutdown()

    if snapshot.state is PipelineState.REJECTED:
        print(snapshot.verdict.reason)
        return 1
    if snapshot.state is PipelineState.FAILED:
        print(f"Failed while {snapshot.failure.stage.value}: {snapshot.failure.message}")
        return 1

    report = snapshot.report
    if report.mock:
        print("(mock feedback, the proxy has no provider credential)")
    for section, body in report.sections().items():
        print(f"\n{section.value}\n{body}")
    return 0


def main():
    """Parses arguments and runs one recording session."""
    parser = argparse.ArgumentParser(description="Record an interview answer and get feedback.")
    parser.add_argument("--question", default=DEFAULT_QUESTION, help="Interview question being answered")
    parser.add_argument("--profile", default=None, help="Feedback profile, e.g. amazon_pm")
    args = parser.parse_args()

    try:
        sys.exit(asyncio.run(run(args.question, args.profile)))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    main()
