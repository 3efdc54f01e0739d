"""
Tests for the runtime event log.
"""
import event_logger


def test_line_printed_and_written(log_dir, capsys):
    event_logger.log("[ℹ️] Moving SL to breakeven: 1.1.")
    out = capsys.readouterr().out
    assert out.rstrip().endswith("Moving SL to breakeven: 1.1.")

    [log_file] = list(log_dir.iterdir())
    content = log_file.read_text(encoding="utf-8")
    assert content.startswith("[")
    assert "Moving SL to breakeven: 1.1." in content


def test_lines_appended_to_same_file(log_dir):
    event_logger.log("first")
    event_logger.log("second")
    [log_file] = list(log_dir.iterdir())
    assert log_file.read_text(encoding="utf-8").splitlines()[1].endswith("second")
