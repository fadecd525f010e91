import pandas as pd

from viz_thresholds import load_summary, plot_threshold_bar, main


def write_summary(path, rows):
    pd.DataFrame(rows, columns=["zone_id", "zone", "threshold_count", "members", "member_share"]).to_csv(path, index=False)


def test_chart_is_written_next_to_summary(tmp_path, capsys):
    summary = tmp_path / "summary.csv"
    write_summary(summary, [("kava", "Kava", 7, 7, 34.1), ("cosmos", "Cosmos Hub", 3, 3, 35.0)])

    assert main(["--summary", str(summary)]) == 0

    assert (tmp_path / "summary.png").stat().st_size > 0
    assert "[OK]" in capsys.readouterr().out


def test_load_summary_orders_by_threshold(tmp_path):
    summary = tmp_path / "summary.csv"
    write_summary(summary, [("kava", "Kava", 7, 7, 34.1), ("cosmos", "Cosmos Hub", 3, 3, 35.0)])
    assert list(load_summary(str(summary))["zone"]) == ["Cosmos Hub", "Kava"]


def test_missing_or_empty_summary(tmp_path):
    assert main(["--summary", str(tmp_path / "missing.csv")]) == 0

    summary = tmp_path / "empty.csv"
    write_summary(summary, [])
    assert plot_threshold_bar(load_summary(str(summary)), "t", str(tmp_path / "x.png")) is False
    assert not (tmp_path / "x.png").exists()
