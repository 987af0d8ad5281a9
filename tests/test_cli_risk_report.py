import json
import subprocess
import sys

import numpy as np
import pandas as pd
import pytest

from deepsigma_math import cli_risk_report


def _write_returns(path, with_benchmark=True):
    rng = np.random.default_rng(3)
    dates = pd.date_range("2022-01-03", periods=80, freq="B")
    market = rng.normal(0.0, 0.01, size=len(dates))
    frame = pd.DataFrame({"date": dates.strftime("%Y-%m-%d"), "portfolio": 0.8 * market + 0.0002})
    if with_benchmark:
        frame["benchmark"] = market
    frame.to_csv(path, index=False)
    return path


def test_main_with_benchmark(tmp_path):
    returns = _write_returns(tmp_path / "returns.csv")
    output = tmp_path / "report.json"
    cli_risk_report.main(["--returns", str(returns), "--output-json", str(output), "--risk-free-rate", "0.01"])
    data = json.loads(output.read_text())
    assert data["observations"] == 80
    assert data["beta"] == pytest.approx(0.8)
    assert data["correlation"] == pytest.approx(1.0)


def test_main_falls_back_when_benchmark_missing(tmp_path):
    returns = _write_returns(tmp_path / "returns.csv", with_benchmark=False)
    output = tmp_path / "report.json"
    cli_risk_report.main(["--returns", str(returns), "--output-json", str(output)])
    data = json.loads(output.read_text())
    assert "beta" not in data
    assert data["annualized_volatility"] > 0


def test_main_no_benchmark_flag(tmp_path):
    returns = _write_returns(tmp_path / "returns.csv")
    output = tmp_path / "report.json"
    cli_risk_report.main(["--returns", str(returns), "--no-benchmark", "--output-json", str(output)])
    assert "tracking_error" not in json.loads(output.read_text())


def test_cli_risk_report_module_runs(tmp_path):
    returns = _write_returns(tmp_path / "returns.csv")
    output = tmp_path / "report.json"
    result = subprocess.run(
        [sys.executable, "-m", "deepsigma_math.cli_risk_report", "--returns", str(returns), "--output-json", str(output)],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr
    assert isinstance(json.loads(output.read_text()), dict)


def test_main_exits_when_series_too_short(tmp_path):
    returns = tmp_path / "returns.csv"
    returns.write_text("date,portfolio\n2024-01-01,0.01\n", encoding="utf-8")
    output = tmp_path / "report.json"
    with pytest.raises(SystemExit) as excinfo:
        cli_risk_report.main(["--returns", str(returns), "--no-benchmark", "--output-json", str(output)])
    assert excinfo.value.code == 1
    assert not output.exists()
