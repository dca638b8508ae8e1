import pytest

from transportation.benchmark import main, run_benchmark


def test_run_benchmark_collects_times():
    results = run_benchmark(8, 5, 4, seed=1)
    assert results['problems'] == 4
    assert len(results['times']) == 4
    assert results['worst'] == max(results['times'])
    assert results['total'] == pytest.approx(sum(results['times']))
    assert results['infeasible'] == 0


def test_run_benchmark_requires_problems():
    with pytest.raises(ValueError):
        run_benchmark(3, 3, 0)


def test_benchmark_main_prints_summary_and_solution(capsys):
    assert main(["--problems", "3", "--rows", "12", "--cols", "9", "--seed", "2", "--show", "4"]) == 0
    out = capsys.readouterr().out
    assert "BENCHMARK SUMMARY" in out
    assert "Problems:            3 (12x9)" in out
    assert "Average time:" in out
    assert "Worst time:" in out
    assert "NORTH-WEST-CORNER PLAN" in out
    assert "Total cost:" in out
    assert "S4" in out and "D4" in out


def test_benchmark_main_skips_solution(capsys):
    assert main(["--problems", "1", "--rows", "2", "--cols", "2", "--show", "0"]) == 0
    assert "NORTH-WEST-CORNER PLAN" not in capsys.readouterr().out


def test_benchmark_main_rejects_bad_sizes():
    assert main(["--problems", "1", "--rows", "0", "--cols", "3", "--show", "0"]) == 1
