from hubfetch.core.progress import ProgressThrottler, build_progress_sink
from hubfetch.models import DownloadConfig, DownloadProgress


def report(fraction: float, size: int = 200_000_000) -> DownloadProgress:
    return DownloadProgress(
        fraction=fraction,
        file_name="weight.bin",
        file_path="Encoder.mlmodelc/weights/weight.bin",
        file_size=size,
        bytes_downloaded=int(size * fraction),
    )


def test_continuous_stream_forwards_one_event_per_step_plus_terminal():
    forwarded = []
    throttler = ProgressThrottler(forwarded.append, step=10)

    for i in range(1001):
        throttler(report(i / 1000))

    non_terminal = [r for r in forwarded if r.fraction < 1.0]
    assert len(non_terminal) == 9
    assert [r.percentage // 10 for r in non_terminal] == list(range(1, 10))
    assert [r.fraction for r in forwarded].count(1.0) == 1
    assert forwarded[-1].fraction == 1.0
    assert throttler.forwarded == 10


def test_terminal_is_forwarded_without_intermediate_events():
    forwarded = []
    throttler = ProgressThrottler(forwarded.append)

    throttler(report(1.0))

    assert [r.fraction for r in forwarded] == [1.0]


def test_nothing_is_forwarded_after_terminal():
    forwarded = []
    throttler = ProgressThrottler(forwarded.append)

    throttler(report(1.0))
    throttler(report(1.0))
    throttler(report(0.5))

    assert len(forwarded) == 1


def test_jumps_reset_the_baseline():
    forwarded = []
    throttler = ProgressThrottler(forwarded.append)

    for fraction in (0.05, 0.375, 0.40, 0.46, 0.5, 1.0):
        throttler(report(fraction))

    assert [r.percentage for r in forwarded] == [37, 50, 100]


def test_small_files_only_forward_terminal_to_caller():
    forwarded = []
    sink = build_progress_sink(1_000, forwarded.append, DownloadConfig())

    sink(report(0.5, size=1_000))
    sink(report(1.0, size=1_000))

    assert [r.fraction for r in forwarded] == [1.0]


def test_small_files_without_callback_have_no_sink():
    assert build_progress_sink(1_000, None, DownloadConfig()) is None


def test_large_files_get_a_throttler_around_the_callback():
    forwarded = []
    sink = build_progress_sink(200_000_000, forwarded.append, DownloadConfig())

    assert isinstance(sink, ProgressThrottler)
    assert sink.sink == forwarded.append


def test_large_files_log_progress_without_callback(caplog):
    sink = build_progress_sink(200_000_000, None, DownloadConfig())

    with caplog.at_level("INFO"):
        sink(report(0.2))

    assert "Progress: 20% of weight.bin" in caplog.text


def test_large_files_without_callback_and_progress_disabled():
    assert build_progress_sink(200_000_000, None, DownloadConfig(show_progress=False)) is None
