from typer.testing import CliRunner

from entrypoints.cli.deal_cli import app

runner = CliRunner()


def test_sdlt_command_shows_flat_rule():
    result = runner.invoke(app, ["sdlt", "600000"])
    assert result.exit_code == 0, result.output
    assert "Flat rule" in result.output
    assert "SDLT: £102,000.00" in result.output


def test_analyse_command_prints_verdict():
    result = runner.invoke(app, ["analyse", "--price", "200000", "--rent", "1200", "--sdlt", "0"])
    assert result.exit_code == 0, result.output
    assert "Gross yield: 7.20%" in result.output
    assert "Verdict [strong]" in result.output


def test_analyse_command_rejects_zero_price():
    result = runner.invoke(app, ["analyse", "--price", "0", "--rent", "1200"])
    assert result.exit_code != 0


def test_screen_command(tmp_path):
    src = tmp_path / "deals.csv"
    src.write_text("purchase_price,monthly_rent\n200000,1200\n300000,1000\n", encoding="utf-8")
    out = tmp_path / "out.csv"

    result = runner.invoke(app, ["screen", str(src), "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert out.exists()
    assert '"rows_evaluated": 2' in result.output
