"""Tests for TwoPassEncoder sequencing and statistics cleanup."""

from pathlib import Path

import pytest

from atem.core import CancellationToken
from atem.errors import ExternalToolError, JobCancelledError
from atem.executor.two_pass import EncodePlan, TwoPassContext, TwoPassEncoder


@pytest.fixture
def plan(temp_dir) -> EncodePlan:
    return EncodePlan(
        input_path=temp_dir / "clip.mp4",
        target_video_bitrate_kbps=500.0,
        audio_bitrate_kbps=96.0,
        output_path=temp_dir / "clip_out.mp4",
    )


def _pass_number(args):
    return args[args.index("-pass") + 1]


class TestTwoPassEncoder:
    def test_runs_pass1_then_pass2(self, plan, runner_factory, linux_caps, temp_dir):
        runner = runner_factory()
        encoder = TwoPassEncoder(runner, "ffmpeg", linux_caps, temp_dir / "stats")

        result = encoder.encode(plan)

        assert result == plan.output_path
        assert [_pass_number(args) for _, args in runner.calls] == ["1", "2"]
        assert all(program == "ffmpeg" for program, _ in runner.calls)
        assert runner.calls[0][1][-1] == "/dev/null"
        assert runner.calls[1][1][-1] == str(plan.output_path)

    def test_both_passes_share_passlogfile(self, plan, runner_factory, linux_caps):
        runner = runner_factory()
        TwoPassEncoder(runner, "ffmpeg", linux_caps).encode(plan)

        logs = [args[args.index("-passlogfile") + 1] for _, args in runner.calls]
        assert logs[0] == logs[1]
        assert Path(logs[0]).name == "ffmpeg2pass"

    def test_pass2_not_run_when_pass1_fails(self, plan, runner_factory, linux_caps):
        runner = runner_factory(fail_on_call=1)
        encoder = TwoPassEncoder(runner, "ffmpeg", linux_caps)

        with pytest.raises(ExternalToolError):
            encoder.encode(plan)

        assert len(runner.calls) == 1
        assert _pass_number(runner.calls[0][1]) == "1"

    def test_pass2_failure_propagates(self, plan, runner_factory, linux_caps):
        runner = runner_factory(fail_on_call=2)

        with pytest.raises(ExternalToolError):
            TwoPassEncoder(runner, "ffmpeg", linux_caps).encode(plan)
        assert len(runner.calls) == 2

    def test_statistics_directory_removed(
        self, plan, runner_factory, linux_caps, temp_dir
    ):
        parent = temp_dir / "stats"
        TwoPassEncoder(runner_factory(), "ffmpeg", linux_caps, parent).encode(plan)
        assert list(parent.iterdir()) == []

    def test_statistics_directory_removed_on_failure(
        self, plan, runner_factory, linux_caps, temp_dir
    ):
        parent = temp_dir / "stats"
        runner = runner_factory(fail_on_call=1)

        with pytest.raises(ExternalToolError):
            TwoPassEncoder(runner, "ffmpeg", linux_caps, parent).encode(plan)
        assert list(parent.iterdir()) == []

    def test_each_job_gets_own_directory(self, plan, runner_factory, linux_caps):
        runner = runner_factory()
        encoder = TwoPassEncoder(runner, "ffmpeg", linux_caps)

        encoder.encode(plan)
        encoder.encode(plan)

        logs = {args[args.index("-passlogfile") + 1] for _, args in runner.calls}
        assert len(logs) == 2

    def test_cancelled_token_stops_before_pass1(
        self, plan, runner_factory, linux_caps
    ):
        runner = runner_factory()
        token = CancellationToken()
        token.cancel()

        with pytest.raises(JobCancelledError, match="before pass 1"):
            TwoPassEncoder(runner, "ffmpeg", linux_caps).encode(plan, token)
        assert runner.calls == []

    def test_cancel_between_passes(self, plan, linux_caps):
        token = CancellationToken()
        calls = []

        class CancellingRunner:
            def run(self, program, args, cancel_token=None):
                calls.append(args)
                token.cancel()
                return ""

            def spawn(self, program, args):
                pass

        with pytest.raises(JobCancelledError, match="before pass 2"):
            TwoPassEncoder(CancellingRunner(), "ffmpeg", linux_caps).encode(
                plan, token
            )
        assert len(calls) == 1


class TestTwoPassContext:
    def test_create_under_parent(self, temp_dir):
        context = TwoPassContext.create(temp_dir / "nested")
        assert context.directory.parent == temp_dir / "nested"
        assert context.directory.name.startswith("atem-")
        assert context.passlogfile == context.directory / "ffmpeg2pass"

    def test_cleanup_is_idempotent(self, temp_dir):
        context = TwoPassContext.create(temp_dir)
        (context.directory / "ffmpeg2pass-0.log").write_text("stats")

        context.cleanup()
        context.cleanup()

        assert not context.directory.exists()
