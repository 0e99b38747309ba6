"""Tests for console formatting and chart output."""

from core.process import TickObservation
from schedulers import FCFSScheduler, RoundRobinScheduler, SJFScheduler
from utils.visualization import Visualizer, padding


def test_padding_aligns_three_digits():
    assert [padding(n) for n in (0, 9, 10, 99, 100, 512)] == [2, 2, 1, 1, 0, 0]


def test_format_tick_single_digits():
    line = Visualizer.format_tick(TickObservation(0, 1, 5, 0, 0))
    assert line == "T0   : P1   - Burst left   5, Wait time   0, Turnaround time   0"


def test_format_tick_mixed_widths():
    line = Visualizer.format_tick(TickObservation(15, 3, 1, 6, 13))
    assert line == "T15  : P3   - Burst left   1, Wait time   6, Turnaround time  13"


def test_simulation_results_report(sample_table):
    report = Visualizer.format_simulation_results(FCFSScheduler(sample_table).run())
    assert "\nP2\n        Waiting time:           4\n        Turnaround time:        7" in report
    assert "Total average waiting time:     3.3" in report
    assert report.endswith("Total average turnaround time:  8.7")


def test_gantt_chart_saved(tmp_path, sample_table):
    result = SJFScheduler(sample_table).run()
    path = tmp_path / "gantt.png"
    Visualizer().draw_gantt_chart(result['gantt_chart'], result['algorithm'],
                                  save_path=str(path), show=False)
    assert path.exists()


def test_comparison_chart_saved(tmp_path, sample_table):
    results = [FCFSScheduler(sample_table).run(),
               RoundRobinScheduler(sample_table, time_quantum=2).run()]
    path = tmp_path / "comparison.png"
    Visualizer().compare_algorithms(results, save_path=str(path), show=False)
    assert path.exists()


def test_statistics_table(capsys, sample_table):
    Visualizer().print_statistics_table([FCFSScheduler(sample_table).run()])
    out = capsys.readouterr().out
    assert "First Come First Served" in out
    assert "3.3" in out
